from __future__ import annotations
import logging
from functools import wraps
from typing import Callable

from flask import request
from werkzeug.exceptions import BadRequest

log = logging.getLogger(__name__)


def _has_body() -> bool:
    length = request.content_length
    if length:
        return True
    # chunked uploads carry no Content-Length
    return bool(request.headers.get("Transfer-Encoding")) and bool(request.get_data(cache=True))


def reject_body(fn: Callable):
    """Read-only endpoints accept neither a request body nor query parameters."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if _has_body():
            log.error("request body was not allowed on %s %s", request.method, request.path)
            raise BadRequest("Request body is not allowed for this endpoint")
        if request.args:
            log.error("query parameters were not allowed on %s %s", request.method, request.path)
            raise BadRequest("Query parameters are not allowed for this endpoint")
        return fn(*args, **kwargs)
    return wrapper


def json_object_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")
    return payload
