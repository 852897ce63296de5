from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db
from .base import utcnow


class Assignment(db.Model):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    num_of_attempts: Mapped[int] = mapped_column(Integer, nullable=False)
    deadline: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    # set once at creation, never reassigned
    owner_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint("points >= 1 AND points <= 10", name="ck_assignments_points_range"),
        CheckConstraint("num_of_attempts >= 1", name="ck_assignments_attempts_min"),
    )

    def __repr__(self):
        return f"<Assignment {self.id} {self.name!r}>"
