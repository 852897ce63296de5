# blueprints/submissions/services.py
"""
Submission admission.

Steps run in order and the first failure wins:
validate url -> deadline -> attempt count -> insert -> notify.

The insert is committed before the event is published. A publish failure
surfaces as 503 but the row stays; consumers of the topic must tolerate
duplicates and gaps.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import BadRequest, NotFound, ServiceUnavailable

from models import Submission, utcnow
from notifications import NotificationError, SnsNotifier
from repositories import AssignmentRepository, SubmissionRepository
from .schemas import is_valid_submission_url

log = logging.getLogger(__name__)


def validate_submission_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BadRequest("Submission URL is missing or empty")
    if not is_valid_submission_url(value):
        raise BadRequest("Invalid submission URL format")
    return value


def submit(*, principal, assignment_id: int, submission_url: Any,
           assignments: AssignmentRepository, submissions: SubmissionRepository,
           notifier: SnsNotifier, attempt_scope: str = "owner",
           now: Optional[datetime] = None) -> Submission:
    url = validate_submission_url(submission_url)
    now = now or utcnow()

    try:
        # row lock serializes the count + insert below (no-op on SQLite)
        assignment = assignments.find_by_id(assignment_id, for_update=True)
        if assignment is None:
            assignments.session.rollback()
            raise NotFound("Assignment not found")

        if now >= assignment.deadline:
            assignments.session.rollback()
            raise BadRequest("Deadline for this assignment has passed")

        used = submissions.count_attempts(
            assignment_id=assignment.id,
            user_id=principal.id,
            user_email=principal.email,
            scope=attempt_scope,
        )
        if used >= assignment.num_of_attempts:
            assignments.session.rollback()
            log.warning("retry limit reached for assignment %s by user %s (%s/%s)",
                        assignment.id, principal.id, used, assignment.num_of_attempts)
            raise BadRequest("Retry limit exceeded")

        sub = Submission(
            assignment_id=assignment.id,
            user_id=principal.id,
            submission_url=url,
            submission_date=now,
            submission_updated=now,
        )
        submissions.create(sub)
    except SQLAlchemyError:
        submissions.session.rollback()
        log.exception("could not record submission for assignment %s", assignment_id)
        raise ServiceUnavailable("Service Unavailable")

    log.info("submission %s admitted for assignment %s (attempt %s of %s)",
             sub.id, assignment.id, used + 1, assignment.num_of_attempts)

    event = {
        "assignmentId": assignment.id,
        "submissionUrl": url,
        "userEmail": principal.email,
    }
    try:
        notifier.publish(event)
    except NotificationError:
        log.error("submission %s stored but notification failed", sub.id)
        raise ServiceUnavailable("Service Unavailable")

    return sub
