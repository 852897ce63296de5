# blueprints/auth/services.py
from __future__ import annotations
import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import ServiceUnavailable, Unauthorized
from werkzeug.security import check_password_hash

from repositories import UserRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Principal(UserMixin):
    """Identity of the caller, rebuilt from Basic credentials on every request."""
    id: int
    email: str


def decode_basic_credentials(header: Optional[str]) -> Tuple[str, str]:
    """Split ``Basic base64(email:password)`` into its two parts."""
    if not header:
        raise Unauthorized("Missing credentials")

    scheme, _, encoded = header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        raise Unauthorized("Unsupported authorization scheme")

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise Unauthorized("Malformed credentials")

    if ":" not in decoded:
        raise Unauthorized("Malformed credentials")
    email, _, password = decoded.partition(":")
    if not email or not password:
        raise Unauthorized("Malformed credentials")
    return email, password


def authenticate(header: Optional[str], *, users: UserRepository) -> Principal:
    email, password = decode_basic_credentials(header)

    try:
        user = users.find_by_email(email)
    except SQLAlchemyError:
        log.exception("credential lookup failed")
        users.session.rollback()
        raise ServiceUnavailable("Service Unavailable")

    # check_password_hash compares digests in constant time
    if user is None or not check_password_hash(user.password_hash, password):
        raise Unauthorized("Invalid credentials")

    return Principal(id=user.id, email=user.email)
