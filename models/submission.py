from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db
from .base import utcnow


def _new_id() -> str:
    return str(uuid4())


class Submission(db.Model):
    __tablename__ = "submissions"

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    assignment_id: Mapped[int] = mapped_column(
        ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    submission_url: Mapped[str] = mapped_column(db.String(2048), nullable=False)
    submission_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    submission_updated: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_submissions_assignment_user", "assignment_id", "user_id"),
    )

    def __repr__(self):
        return f"<Submission {self.id} assignment={self.assignment_id}>"
