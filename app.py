from __future__ import annotations
import logging
import os
from importlib import import_module
from pathlib import Path

import click
from flask import Flask
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from config import config_map
from extensions import db, metrics, migrate, login_manager, notifier
from repositories import ATTEMPT_SCOPES, UserRepository
from user_import import load_users_file

log = logging.getLogger(__name__)


def _load_users_from_csv(app: Flask) -> None:
    if not app.config.get("LOAD_USERS_ON_BOOT"):
        return
    path = app.config.get("USER_CSV_PATH")
    if not path or not Path(path).is_file():
        log.info("no user CSV at %s, skipping bootstrap", path)
        return
    with app.app_context():
        # schema is owned by migrations; wait for `flask db upgrade`
        if not inspect(db.engine).has_table("users"):
            log.info("users table missing, skipping bootstrap until migrations run")
            return
        try:
            load_users_file(path, users=UserRepository(db.session))
        except (OSError, SQLAlchemyError):
            db.session.rollback()
            log.exception("error loading and creating user accounts")


def register_blueprints(app: Flask) -> None:
    # request loader and 401 handler register on import
    import_module("blueprints.auth.routes")
    from blueprints.core import bp as core_bp
    from blueprints.assignments import bp as assignments_bp
    from blueprints.submissions import bp as submissions_bp

    # core has no prefix: /healthz at the root
    app.register_blueprint(core_bp)
    app.register_blueprint(assignments_bp, url_prefix="/v1")
    app.register_blueprint(submissions_bp, url_prefix="/v1")


def register_commands(app: Flask) -> None:
    @app.cli.command("load-users")
    @click.argument("path", required=False)
    def load_users_command(path: str | None):
        """Create users from a CSV file (defaults to USER_CSV_PATH)."""
        path = path or app.config["USER_CSV_PATH"]
        report = load_users_file(path, users=UserRepository(db.session))
        click.echo(f"created={len(report.created)} existing={len(report.existing)} "
                   f"skipped={len(report.skipped_rows)}")


def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])

    scope = app.config.get("SUBMISSION_ATTEMPT_SCOPE")
    if scope not in ATTEMPT_SCOPES:
        raise ValueError(f"SUBMISSION_ATTEMPT_SCOPE must be one of {ATTEMPT_SCOPES}, got {scope!r}")

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    notifier.init_app(app)
    metrics.init_app(app)
    register_blueprints(app)
    register_commands(app)
    _load_users_from_csv(app)
    return app
