from __future__ import annotations
import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict

# scheme optional, host with a 2-6 letter top-level label, optional path;
# matched with fullmatch so a trailing newline does not slip past `$`
SUBMISSION_URL_RE = re.compile(
    r"^(https?://)?([\w.-]+)\.([a-zA-Z]{2,6})(/[\w.-]*)*/?$",
    re.ASCII,
)


def is_valid_submission_url(url: str) -> bool:
    return SUBMISSION_URL_RE.fullmatch(url) is not None


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignment_id: int
    user_id: int | None
    submission_url: str
    submission_date: datetime
    submission_updated: datetime
