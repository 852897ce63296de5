"""
One-shot user bootstrap from CSV.

Expected header: first_name,last_name,email,password (comma or semicolon).
Existing emails (compared case-insensitively) are left untouched; new users
get a hashed password and keep their email as written.
"""
from __future__ import annotations
import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from werkzeug.security import generate_password_hash

from models import User
from repositories import UserRepository

log = logging.getLogger(__name__)


@dataclass
class LoadReport:
    created: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)  # 1-based, header excluded


def read_users_csv(text: str) -> List[Dict[str, str]]:
    sample = text.splitlines()[0] if text else ""
    delimiter = ";" if sample.count(";") > sample.count(",") else ","
    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    rows = []
    for r in reader:
        rows.append({(k or "").strip(): (v or "").strip() for k, v in r.items()})
    return rows


def load_users(rows: List[Dict[str, str]], *, users: UserRepository) -> LoadReport:
    report = LoadReport()
    seen: set[str] = set()
    for i, r in enumerate(rows, start=1):
        email = r.get("email", "")
        password = r.get("password", "")
        if not email or not password:
            log.error("invalid user row %s: email and password are required", i)
            report.skipped_rows.append(i)
            continue
        if email.lower() in seen or users.find_by_email(email) is not None:
            log.info("user with email %s already exists", email)
            report.existing.append(email)
            continue
        seen.add(email.lower())
        users.add(User(
            email=email,
            password_hash=generate_password_hash(password),
            first_name=r.get("first_name") or None,
            last_name=r.get("last_name") or None,
        ))
        report.created.append(email)
        log.info("user with email %s inserted", email)

    users.session.commit()
    return report


def load_users_file(path: str | Path, *, users: UserRepository) -> LoadReport:
    text = Path(path).read_text(encoding="utf-8-sig")
    report = load_users(read_users_csv(text), users=users)
    log.info("user bootstrap from %s: %s created, %s existing, %s skipped",
             path, len(report.created), len(report.existing), len(report.skipped_rows))
    return report
