from __future__ import annotations

from extensions import db
from models import User
from repositories import UserRepository
from user_import import load_users, load_users_file, read_users_csv

CSV = """first_name,last_name,email,password
Jane,Doe,jane@example.com,abc123
John,Smith,,nopass
Ann,Lee,ann@example.com,
Old,User,a@example.com,whatever
Jane,Again,jane@example.com,other
"""


def test_read_users_csv_semicolon():
    rows = read_users_csv("first_name;last_name;email;password\nA;B;x@example.com;pw\n")
    assert rows == [{"first_name": "A", "last_name": "B", "email": "x@example.com", "password": "pw"}]


def test_load_users_creates_new_and_skips_bad(app):
    report = load_users(read_users_csv(CSV), users=UserRepository(db.session))
    assert report.created == ["jane@example.com"]
    assert report.skipped_rows == [2, 3]
    assert set(report.existing) == {"a@example.com", "jane@example.com"}

    jane = UserRepository(db.session).find_by_email("jane@example.com")
    assert jane.first_name == "Jane"
    assert jane.password_hash != "abc123"
    assert jane.check_password("abc123")

    # existing user's password is not touched
    old = UserRepository(db.session).find_by_email("a@example.com")
    assert old.check_password("apass")


def test_load_users_file_is_idempotent(app, tmp_path):
    path = tmp_path / "user.csv"
    path.write_text(CSV, encoding="utf-8")
    load_users_file(path, users=UserRepository(db.session))
    second = load_users_file(path, users=UserRepository(db.session))
    assert second.created == []
    assert db.session.query(User).count() == 3


def test_loaded_user_can_authenticate(app, client):
    load_users(read_users_csv(CSV), users=UserRepository(db.session))
    from conftest import basic
    r = client.get("/v1/assignments", headers=basic("jane@example.com", "abc123"))
    assert r.status_code == 200
    assert r.get_json() == []


def test_cli_load_users(app, tmp_path):
    path = tmp_path / "user.csv"
    path.write_text(CSV, encoding="utf-8")
    result = app.test_cli_runner().invoke(args=["load-users", str(path)])
    assert result.exit_code == 0
    assert "created=1" in result.output


def test_mixed_case_email_kept_as_written_and_can_authenticate(app, client):
    rows = read_users_csv("first_name,last_name,email,password\nJane,Doe,Jane@Example.com,abc123\n")
    report = load_users(rows, users=UserRepository(db.session))
    assert report.created == ["Jane@Example.com"]
    assert UserRepository(db.session).find_by_email("jane@example.com").email == "Jane@Example.com"

    from conftest import basic
    for login in ("Jane@Example.com", "jane@example.com"):
        r = client.get("/v1/assignments", headers=basic(login, "abc123"))
        assert r.status_code == 200, login


def test_case_variant_of_existing_email_is_not_duplicated(app):
    rows = read_users_csv("first_name,last_name,email,password\nA,Upper,A@Example.com,x\nB,Lower,b@example.com,y\nB,Dup,B@EXAMPLE.COM,z\n")
    report = load_users(rows, users=UserRepository(db.session))
    assert report.created == []
    assert report.existing == ["A@Example.com", "b@example.com", "B@EXAMPLE.COM"]
    assert db.session.query(User).count() == 2


def test_seed_falls_back_to_bundled_fixture(app, tmp_path):
    from seed import DEMO_CSV, default_csv_path
    assert default_csv_path(str(tmp_path / "missing.csv")) == DEMO_CSV
    assert default_csv_path(None) == DEMO_CSV

    report = load_users_file(DEMO_CSV, users=UserRepository(db.session))
    assert report.created == ["jane.doe@example.com", "john.smith@example.com"]
    assert report.skipped_rows == []
