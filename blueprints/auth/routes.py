# blueprints/auth/routes.py
from __future__ import annotations
import logging
from typing import Optional

from flask import jsonify, request
from werkzeug.exceptions import Unauthorized

from extensions import db, login_manager
from repositories import UserRepository
from .services import Principal, authenticate

log = logging.getLogger(__name__)


@login_manager.request_loader
def load_principal_from_request(req) -> Optional[Principal]:
    # ServiceUnavailable propagates so a store outage is not reported as 401
    try:
        return authenticate(req.headers.get("Authorization"), users=UserRepository(db.session))
    except Unauthorized as e:
        log.warning("authentication failed: %s", e.description)
        return None


@login_manager.unauthorized_handler
def _unauth():
    log.warning("unauthorized request to %s %s", request.method, request.path)
    resp = jsonify({"error": "Unauthorized"})
    resp.status_code = 401
    resp.headers["WWW-Authenticate"] = 'Basic realm="assignments"'
    return resp
