from __future__ import annotations
import base64

import pytest
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import Unauthorized

from blueprints.auth.services import Principal, authenticate, decode_basic_credentials
from extensions import db
from repositories import UserRepository
from conftest import basic


def _hdr(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode()).decode()


def test_decode_ok():
    assert decode_basic_credentials(_hdr("a@example.com:p:w")) == ("a@example.com", "p:w")


@pytest.mark.parametrize("header", [
    None,
    "",
    "Bearer abc",
    "Basic",
    "Basic !!!notbase64",
    _hdr("no-colon-here"),
    _hdr(":secret"),
    _hdr("a@example.com:"),
])
def test_decode_rejects_malformed(header):
    with pytest.raises(Unauthorized):
        decode_basic_credentials(header)


def test_authenticate_returns_principal(app):
    p = authenticate(_hdr("a@example.com:apass"), users=UserRepository(db.session))
    assert isinstance(p, Principal)
    assert p.email == "a@example.com"
    assert p.is_authenticated


def test_authenticate_wrong_password_and_unknown_user(app):
    users = UserRepository(db.session)
    with pytest.raises(Unauthorized):
        authenticate(_hdr("a@example.com:wrong"), users=users)
    with pytest.raises(Unauthorized):
        authenticate(_hdr("ghost@example.com:apass"), users=users)


def test_unauthenticated_list_401(client):
    r = client.get("/v1/assignments")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"].startswith("Basic")


def test_wrong_password_401(client):
    r = client.get("/v1/assignments", headers=basic("a@example.com", "nope"))
    assert r.status_code == 401


def test_store_down_during_auth_is_503_not_401(client, monkeypatch):
    def boom(self, email):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(UserRepository, "find_by_email", boom)
    r = client.get("/v1/assignments", headers=basic("a@example.com", "apass"))
    assert r.status_code == 503
