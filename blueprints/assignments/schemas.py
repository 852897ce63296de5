from __future__ import annotations
import re
from datetime import date, datetime, UTC
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator,
)
from pydantic_core import PydanticCustomError

ASSIGNMENT_FIELDS = ("name", "points", "num_of_attempts", "deadline")
POINTS_MIN, POINTS_MAX = 1, 10

_INT_RE = re.compile(r"[+-]?\d+")


def parse_deadline(value: Any) -> datetime:
    """ISO-8601 date or datetime -> naive UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        dt = datetime.fromisoformat(value.strip())
    else:
        raise ValueError("deadline must be an ISO-8601 date or datetime")
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC).replace(tzinfo=None)
    return dt


def parse_int(value: Any) -> int:
    """Integer or integer string; floats only when integral, never booleans."""
    if isinstance(value, bool):
        raise ValueError("not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise ValueError("not an integer")


class AssignmentIn(BaseModel):
    """Create payload. Unknown keys are rejected, not dropped."""
    model_config = ConfigDict(extra="forbid")

    name: StrictStr = Field(max_length=255)
    points: StrictInt = Field(ge=POINTS_MIN, le=POINTS_MAX)
    num_of_attempts: StrictInt = Field(ge=1)
    deadline: datetime

    @field_validator("name")
    @classmethod
    def _non_empty(cls, v: str):
        if not v.strip():
            raise PydanticCustomError("empty", "name is empty")
        return v.strip()

    @field_validator("deadline", mode="before")
    @classmethod
    def _deadline(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("empty", "deadline is empty")
        return parse_deadline(v)


class AssignmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    points: int
    num_of_attempts: int
    deadline: datetime
    created_at: datetime
    updated_at: datetime
    owner_user_id: int


_FIELD_MESSAGES = {
    "name": "Invalid data type for name field",
    "points": "Invalid data for points field; it must be a number between 1 and 10",
    "num_of_attempts": "Invalid value for num_of_attempts. It must be an integer greater than or equal to 1.",
    "deadline": "Invalid value for deadline. It must be an ISO-8601 date or datetime.",
}


def describe_create_error(ve: ValidationError) -> str:
    errs = ve.errors()
    for e in errs:
        if e["type"] == "extra_forbidden":
            return f"Invalid field: {e['loc'][0]}"
    for e in errs:
        if e["type"] in ("missing", "empty") or e.get("input") is None:
            return "All assignment fields are required"
    field = errs[0]["loc"][0] if errs and errs[0]["loc"] else None
    return _FIELD_MESSAGES.get(field, "Invalid assignment payload")
