# blueprints/assignments/services.py
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import BadRequest, Forbidden, InternalServerError, NotFound

from models import Assignment, utcnow
from repositories import AssignmentRepository
from .schemas import AssignmentIn, POINTS_MAX, POINTS_MIN, parse_deadline, parse_int

log = logging.getLogger(__name__)


def create_assignment(*, principal, data: AssignmentIn, repo: AssignmentRepository) -> Assignment:
    now = utcnow()
    a = Assignment(
        name=data.name,
        points=data.points,
        num_of_attempts=data.num_of_attempts,
        deadline=data.deadline,
        created_at=now,
        updated_at=now,
        owner_user_id=principal.id,
    )
    repo.create(a)
    log.info("assignment %s created by user %s", a.id, principal.id)
    return a


def get_owned_assignment(*, principal, assignment_id: int, repo: AssignmentRepository) -> Assignment:
    """404 when the id is unknown, 403 when it belongs to someone else."""
    a = repo.find_by_id_and_owner(assignment_id, principal.id)
    if a is not None:
        return a
    if repo.find_by_id(assignment_id) is None:
        raise NotFound("Assignment not found")
    log.warning("user %s denied access to assignment %s", principal.id, assignment_id)
    raise Forbidden("Permission denied. You can only access your own assignments.")


def list_assignments(*, principal, repo: AssignmentRepository) -> List[Assignment]:
    return repo.find_all_by_owner(principal.id)


def delete_assignment(*, principal, assignment_id: int, repo: AssignmentRepository) -> None:
    a = get_owned_assignment(principal=principal, assignment_id=assignment_id, repo=repo)
    repo.delete(a)
    log.info("assignment %s deleted by user %s", assignment_id, principal.id)


# ---------- full replace ----------
def _required(payload: Dict[str, Any], field: str) -> Any:
    value = payload.get(field)
    if value is None:
        raise BadRequest(f"{field} is required and cannot be null.")
    return value


def validate_replacement(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Check name -> points -> num_of_attempts -> deadline, stopping at the first bad field."""
    out: Dict[str, Any] = {}

    name = _required(payload, "name")
    if not isinstance(name, str) or not name.strip():
        raise BadRequest("Invalid value for name. It must be a non-empty string.")
    out["name"] = name.strip()

    raw = _required(payload, "points")
    try:
        points = parse_int(raw)
    except ValueError:
        points = None
    if points is None or not (POINTS_MIN <= points <= POINTS_MAX):
        raise BadRequest("Invalid value for points. It must be an integer between 1 and 10.")
    out["points"] = points

    raw = _required(payload, "num_of_attempts")
    try:
        attempts = parse_int(raw)
    except ValueError:
        attempts = None
    if attempts is None or attempts < 1:
        raise BadRequest(
            "Invalid value for num_of_attempts. It must be an integer greater than or equal to 1."
        )
    out["num_of_attempts"] = attempts

    raw = _required(payload, "deadline")
    try:
        out["deadline"] = parse_deadline(raw)
    except ValueError:
        raise BadRequest("Invalid value for deadline. It must be an ISO-8601 date or datetime.")

    return out


def update_assignment(*, principal, assignment_id: int, payload: Dict[str, Any],
                      repo: AssignmentRepository, enforce_ownership: bool = True,
                      now: Optional[datetime] = None) -> Assignment:
    try:
        a = repo.find_by_id(assignment_id)
        if a is None:
            raise NotFound("Assignment not found")
        if enforce_ownership and a.owner_user_id != principal.id:
            log.warning("user %s denied update of assignment %s", principal.id, assignment_id)
            raise Forbidden("Permission denied. You can only update your own assignments.")

        fields = validate_replacement(payload)
        for key, value in fields.items():
            setattr(a, key, value)
        a.updated_at = now or utcnow()
        repo.save(a)
    except SQLAlchemyError:
        repo.session.rollback()
        log.exception("error updating assignment %s", assignment_id)
        raise InternalServerError("Internal Server Error")

    log.info("assignment %s updated by user %s", assignment_id, principal.id)
    return a
