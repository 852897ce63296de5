# blueprints/submissions/routes.py
from __future__ import annotations

from flask import current_app, jsonify
from flask_login import current_user, login_required

from blueprints.core.guards import json_object_body
from extensions import db, metrics, notifier
from repositories import AssignmentRepository, SubmissionRepository
from . import bp
from . import services as svc
from .schemas import SubmissionOut


@bp.post("/assignments/<int:assignment_id>/submission")
@metrics.counted("assignmentssubmissionendpoint")
@login_required
def create_submission(assignment_id: int):
    payload = json_object_body()
    sub = svc.submit(
        principal=current_user,
        assignment_id=assignment_id,
        submission_url=payload.get("submission_url"),
        assignments=AssignmentRepository(db.session),
        submissions=SubmissionRepository(db.session),
        notifier=notifier,
        attempt_scope=current_app.config.get("SUBMISSION_ATTEMPT_SCOPE", "owner"),
    )
    resp = jsonify(SubmissionOut.model_validate(sub).model_dump(mode="json"))
    resp.status_code = 201
    return resp
