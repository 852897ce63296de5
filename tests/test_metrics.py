from __future__ import annotations

from flask import Flask

from extensions import metrics
from metrics import StatsdMetrics
from conftest import FakeStatsClient

HW1 = {"name": "HW1", "points": 5, "num_of_attempts": 2, "deadline": "2099-01-01"}


def test_each_endpoint_bumps_its_counter(client, auth_a, stats, sns):
    assert client.get("/healthz").status_code == 200
    aid = client.post("/v1/assignments", json=HW1, headers=auth_a).get_json()["id"]
    client.get("/v1/assignments", headers=auth_a)
    client.get(f"/v1/assignments/{aid}", headers=auth_a)
    client.put(f"/v1/assignments/{aid}", json=HW1, headers=auth_a)
    client.patch(f"/v1/assignments/{aid}", json={})
    client.post(f"/v1/assignments/{aid}/submission",
                json={"submission_url": "https://example.com/a.zip"}, headers=auth_a)
    client.delete(f"/v1/assignments/{aid}", headers=auth_a)

    assert stats.counts == {
        "healthzendpoint": 1,
        "assignmentscreateendpoint": 1,
        "assignmentsgetendpoint": 1,
        "assignmentsgetbyidendpoint": 1,
        "assignmentsputendpoint": 1,
        "assignmentspatchendpoint": 1,
        "assignmentssubmissionendpoint": 1,
        "assignmentsdeleteendpoint": 1,
    }


def test_rejected_requests_are_still_counted(client, stats):
    assert client.post("/healthz").status_code == 405
    assert client.get("/v1/assignments").status_code == 401
    assert stats.counts == {"healthzendpoint": 1, "assignmentsgetendpoint": 1}


def test_disabled_metrics_do_not_touch_client(client):
    fake = FakeStatsClient()
    metrics.client = fake
    assert metrics.enabled is False
    assert client.get("/healthz").status_code == 200
    assert fake.counts == {}


def test_init_app_builds_client_from_config():
    app = Flask(__name__)
    app.config.update(STATSD_ENABLED=True, STATSD_HOST="127.0.0.1", STATSD_PORT=9125, STATSD_PREFIX="webapp")
    m = StatsdMetrics(app)
    assert m.enabled is True
    assert m.client is not None
    assert m.client._prefix == "webapp"
    assert app.extensions["statsd_metrics"] is m
