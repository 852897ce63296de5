from __future__ import annotations
import base64
import json

import pytest
from botocore.exceptions import ClientError
from flask import g
from flask.testing import FlaskClient
from sqlalchemy import select
from werkzeug.security import generate_password_hash

from app import create_app
from extensions import db, metrics, notifier
from models import Submission, User

USERS = {
    "a@example.com": "apass",
    "b@example.com": "bpass",
}


class FakeSnsClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published: list[tuple[str, dict]] = []

    def publish(self, TopicArn, Message):
        if self.fail:
            raise ClientError({"Error": {"Code": "InternalError", "Message": "boom"}}, "Publish")
        self.published.append((TopicArn, json.loads(Message)))
        return {"MessageId": f"msg-{len(self.published)}"}


def basic(email: str, password: str) -> dict:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture()
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        db.session.add_all([
            User(email=email, password_hash=generate_password_hash(pw), first_name="T", last_name=email[0])
            for email, pw in USERS.items()
        ])
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


class IsolatedClient(FlaskClient):
    # The app fixture keeps one app context pushed, which Flask reuses for
    # every test request; drop Flask-Login's per-request user cache so each
    # request authenticates on its own, as it would in a fresh context.
    def open(self, *args, **kwargs):
        g.pop("_login_user", None)
        return super().open(*args, **kwargs)


@pytest.fixture()
def client(app):
    app.test_client_class = IsolatedClient
    return app.test_client()


@pytest.fixture()
def sns():
    fake = FakeSnsClient()
    notifier.client = fake
    return fake


@pytest.fixture()
def auth_a():
    return basic("a@example.com", USERS["a@example.com"])


@pytest.fixture()
def auth_b():
    return basic("b@example.com", USERS["b@example.com"])


def submissions_for(assignment_id: int) -> list[Submission]:
    return list(db.session.execute(
        select(Submission)
        .where(Submission.assignment_id == assignment_id)
        .order_by(Submission.submission_date.asc())
    ).scalars())


class FakeStatsClient:
    def __init__(self):
        self.counts: dict[str, int] = {}

    def incr(self, stat, count=1, rate=1):
        self.counts[stat] = self.counts.get(stat, 0) + count


@pytest.fixture()
def stats():
    fake = FakeStatsClient()
    metrics.client = fake
    metrics.enabled = True
    return fake
