# blueprints/assignments/routes.py
from __future__ import annotations
from typing import Any

from flask import current_app, jsonify, url_for
from flask_login import current_user, login_required
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, MethodNotAllowed, NotFound

from blueprints.core.guards import json_object_body, reject_body
from extensions import db, metrics
from repositories import AssignmentRepository
from . import bp
from . import services as svc
from .schemas import AssignmentIn, AssignmentOut, describe_create_error


def _repo() -> AssignmentRepository:
    return AssignmentRepository(db.session)


def _dump(a) -> dict:
    return AssignmentOut.model_validate(a).model_dump(mode="json")


def _parse_id(raw: str) -> int:
    # ids are matched as plain strings so PATCH answers 405 for any id
    if not (raw.isascii() and raw.isdigit()):
        raise NotFound("Assignment not found")
    return int(raw)


def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp


@bp.post("/assignments")
@metrics.counted("assignmentscreateendpoint")
@login_required
def create_assignment():
    payload = json_object_body()
    try:
        data = AssignmentIn.model_validate(payload)
    except ValidationError as ve:
        raise BadRequest(describe_create_error(ve))

    a = svc.create_assignment(principal=current_user, data=data, repo=_repo())
    return created(url_for("assignments.get_assignment", assignment_id=a.id), _dump(a))


@bp.get("/assignments")
@metrics.counted("assignmentsgetendpoint")
@reject_body
@login_required
def list_assignments():
    items = svc.list_assignments(principal=current_user, repo=_repo())
    return jsonify([_dump(a) for a in items])


@bp.get("/assignments/<assignment_id>")
@metrics.counted("assignmentsgetbyidendpoint")
@reject_body
@login_required
def get_assignment(assignment_id: str):
    a = svc.get_owned_assignment(principal=current_user, assignment_id=_parse_id(assignment_id), repo=_repo())
    return jsonify(_dump(a))


@bp.delete("/assignments/<assignment_id>")
@metrics.counted("assignmentsdeleteendpoint")
@reject_body
@login_required
def delete_assignment(assignment_id: str):
    svc.delete_assignment(principal=current_user, assignment_id=_parse_id(assignment_id), repo=_repo())
    return jsonify({"message": "Assignment successfully deleted"})


@bp.put("/assignments/<assignment_id>")
@metrics.counted("assignmentsputendpoint")
@login_required
def update_assignment(assignment_id: str):
    payload = json_object_body()
    svc.update_assignment(
        principal=current_user,
        assignment_id=_parse_id(assignment_id),
        payload=payload,
        repo=_repo(),
        enforce_ownership=bool(current_app.config.get("ENFORCE_UPDATE_OWNERSHIP", True)),
    )
    return "", 204


@bp.patch("/assignments/<assignment_id>")
@metrics.counted("assignmentspatchendpoint")
def patch_assignment(assignment_id: str):
    # only full replacement is supported
    raise MethodNotAllowed(
        valid_methods=["GET", "PUT", "DELETE"],
        description="Update (PATCH) is not allowed",
    )
