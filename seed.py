"""
Idempotent seed script.
Usage:
  python seed.py --reset            # drop and recreate tables, then load users + demo assignment
  python seed.py --csv users.csv    # load users from a CSV (defaults to USER_CSV_PATH,
                                    # then fixtures/user.csv)
  python seed.py --ensure-demo      # create only the demo user (demo@example.com / demo)
"""
from __future__ import annotations
from datetime import timedelta
import argparse
from pathlib import Path

from app import create_app
from extensions import db
from models import Assignment, User, utcnow
from repositories import AssignmentRepository, UserRepository
from user_import import load_users_file

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo"
DEMO_CSV = Path(__file__).resolve().parent / "fixtures" / "user.csv"


def ensure_demo_user() -> tuple[User, bool]:
    users = UserRepository(db.session)
    u = users.find_by_email(DEMO_EMAIL)
    if u:
        return u, False
    u = User(email=DEMO_EMAIL, first_name="Demo", last_name="User")
    u.set_password(DEMO_PASSWORD)
    users.add(u)
    db.session.commit()
    return u, True


def seed_demo_assignment(owner: User) -> bool:
    repo = AssignmentRepository(db.session)
    if repo.find_all_by_owner(owner.id):
        return False
    now = utcnow()
    repo.create(Assignment(
        name="HW1", points=5, num_of_attempts=2,
        deadline=now + timedelta(days=30),
        created_at=now, updated_at=now,
        owner_user_id=owner.id,
    ))
    return True


def default_csv_path(configured: str | None) -> Path:
    if configured and Path(configured).is_file():
        return Path(configured)
    return DEMO_CSV


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--reset", action="store_true", help="drop + create + demo seed")
    parser.add_argument("--csv", help="path to a users CSV")
    parser.add_argument("--ensure-demo", action="store_true", help="create only the demo user")
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()

        if args.ensure_demo:
            _, created = ensure_demo_user()
            print("Demo user created." if created else "Demo user already exists.")
            return

        path = args.csv or default_csv_path(app.config.get("USER_CSV_PATH"))
        try:
            report = load_users_file(path, users=UserRepository(db.session))
            print(f"[seed] users: {len(report.created)} created, {len(report.existing)} existing, "
                  f"{len(report.skipped_rows)} skipped")
        except FileNotFoundError:
            print(f"[seed] no CSV at {path}, skipping user load")

        demo, _ = ensure_demo_user()
        if seed_demo_assignment(demo):
            print("[seed] demo assignment created")
        print("[seed] complete")


if __name__ == "__main__":
    main()
