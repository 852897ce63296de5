from __future__ import annotations
import json, logging
from datetime import datetime, UTC

from flask import g, jsonify, make_response, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException, MethodNotAllowed, ServiceUnavailable
from werkzeug.wrappers.response import Response

from extensions import db, metrics
from . import bp
from .guards import reject_body

log = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in ("event", "path", "method", "status", "duration_ms", "user_id"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _setup_structured_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    has_json = any(
        isinstance(h, logging.StreamHandler)
        and isinstance(getattr(h, "formatter", None), JSONFormatter)
        for h in root.handlers
    )
    if not has_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(level)


@bp.record_once
def _on_register(state):
    _setup_structured_logging(state.app)


@bp.before_app_request
def _start_timer():
    g._req_start = datetime.now(UTC)


@bp.after_app_request
def _log_request(response: Response):
    try:
        duration_ms = int((datetime.now(UTC) - g._req_start).total_seconds() * 1000)
    except AttributeError:
        duration_ms = None
    extra = {
        "event": "http_request",
        "path": request.path,
        "method": request.method,
        "status": response.status_code,
        "duration_ms": duration_ms,
    }
    # only when auth already ran; reading current_user here would trigger a lookup
    user = g.get("_login_user")
    if user is not None and user.is_authenticated:
        extra["user_id"] = user.id
    log.info("request handled", extra=extra)
    return response


# ---------- errors ----------
@bp.app_errorhandler(HTTPException)
def _http_error(e: HTTPException):
    if e.code and e.code >= 500:
        log.error("%s %s -> %s %s", request.method, request.path, e.code, e.description)
    else:
        log.warning("%s %s -> %s %s", request.method, request.path, e.code, e.description)
    resp = jsonify({"error": e.description})
    resp.status_code = e.code or 500
    if isinstance(e, MethodNotAllowed) and e.valid_methods:
        resp.headers["Allow"] = ", ".join(e.valid_methods)
    return resp


@bp.app_errorhandler(SQLAlchemyError)
def _store_error(e: SQLAlchemyError):
    db.session.rollback()
    log.exception("store error on %s %s", request.method, request.path)
    return jsonify({"error": "Service Unavailable"}), 503


# ---------- health ----------
@bp.route("/healthz", methods=ALL_METHODS, provide_automatic_options=False)
@metrics.counted("healthzendpoint")
def healthz():
    if request.method != "GET":
        raise MethodNotAllowed(valid_methods=["GET"])
    return _healthz_get()


@reject_body
def _healthz_get():
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("health check could not reach the store")
        raise ServiceUnavailable("Service Unavailable")
    resp = make_response("", 200)
    resp.headers["Cache-Control"] = "no-cache"
    return resp
