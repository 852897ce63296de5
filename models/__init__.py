from .base import utcnow
from .user import User
from .assignment import Assignment
from .submission import Submission

__all__ = ["utcnow", "User", "Assignment", "Submission"]
