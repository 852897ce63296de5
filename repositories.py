"""
Data access for users, assignments and submissions.

Each repository wraps the session it is given; nothing here opens its own
connection. Ownership is always an explicit ``owner_user_id`` filter.
"""
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import Assignment, Submission, User

ATTEMPT_SCOPES = ("owner", "submitter")


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_email(self, email: str) -> Optional[User]:
        # emails are stored as written; lookups ignore case
        return self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        ).scalar_one_or_none()

    def add(self, user: User) -> User:
        self.session.add(user)
        return user


class AssignmentRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, assignment: Assignment) -> Assignment:
        self.session.add(assignment)
        self.session.commit()
        return assignment

    def find_by_id(self, assignment_id: int, *, for_update: bool = False) -> Optional[Assignment]:
        stmt = select(Assignment).where(Assignment.id == assignment_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_id_and_owner(self, assignment_id: int, owner_user_id: int) -> Optional[Assignment]:
        return self.session.execute(
            select(Assignment).where(
                Assignment.id == assignment_id,
                Assignment.owner_user_id == owner_user_id,
            )
        ).scalar_one_or_none()

    def find_all_by_owner(self, owner_user_id: int) -> List[Assignment]:
        return list(self.session.execute(
            select(Assignment)
            .where(Assignment.owner_user_id == owner_user_id)
            .order_by(Assignment.id.asc())
        ).scalars())

    def save(self, assignment: Assignment) -> Assignment:
        self.session.add(assignment)
        self.session.commit()
        return assignment

    def delete(self, assignment: Assignment) -> None:
        # SQLite does not enforce ON DELETE CASCADE without the pragma
        self.session.query(Submission).filter(
            Submission.assignment_id == assignment.id
        ).delete(synchronize_session=False)
        self.session.delete(assignment)
        self.session.commit()


class SubmissionRepository:
    def __init__(self, session: Session):
        self.session = session

    def count_attempts(self, *, assignment_id: int, user_id: int, user_email: str,
                       scope: str = "owner") -> int:
        """
        Number of prior submissions that count against the attempt limit.

        ``owner`` joins through the assignment's owner and matches the
        submitting user's email, so only the owner's view of the assignment
        is counted. ``submitter`` counts the submitting user's own rows.
        """
        if scope not in ATTEMPT_SCOPES:
            raise ValueError(f"unknown attempt scope: {scope}")

        stmt = select(func.count(Submission.id)).where(Submission.assignment_id == assignment_id)
        if scope == "owner":
            stmt = (
                stmt.join(Assignment, Assignment.id == Submission.assignment_id)
                .join(User, User.id == Assignment.owner_user_id)
                .where(User.email == user_email)
            )
        else:
            stmt = stmt.where(Submission.user_id == user_id)
        return int(self.session.execute(stmt).scalar_one())

    def create(self, submission: Submission) -> Submission:
        self.session.add(submission)
        self.session.commit()
        return submission
