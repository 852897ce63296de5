from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    BASE_DIR = Path(__file__).resolve().parent
    # SQLite file in project directory
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'app.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # notifications (SNS)
    SNS_TOPIC_ARN = os.getenv("SNS_TOPIC_ARN")
    AWS_REGION = os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "us-east-1"))
    AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")  # e.g. http://localhost:4566 for LocalStack
    NOTIFICATIONS_ENABLED = _env_flag("NOTIFICATIONS_ENABLED", bool(os.getenv("SNS_TOPIC_ARN")))

    # endpoint hit counters (StatsD over UDP)
    STATSD_ENABLED = _env_flag("STATSD_ENABLED", False)
    STATSD_HOST = os.getenv("STATSD_HOST", "localhost")
    STATSD_PORT = int(os.getenv("STATSD_PORT", "8125"))
    STATSD_PREFIX = os.getenv("STATSD_PREFIX", "")

    # one-shot user bootstrap
    USER_CSV_PATH = os.getenv("USER_CSV_PATH", str(BASE_DIR / "user.csv"))
    LOAD_USERS_ON_BOOT = _env_flag("LOAD_USERS_ON_BOOT", True)

    # "owner": count attempts through the assignment owner's email (legacy)
    # "submitter": count attempts of the submitting user only
    SUBMISSION_ATTEMPT_SCOPE = os.getenv("SUBMISSION_ATTEMPT_SCOPE", "owner")
    ENFORCE_UPDATE_OWNERSHIP = _env_flag("ENFORCE_UPDATE_OWNERSHIP", True)


class DevConfig(BaseConfig):
    DEBUG = True


class ProdConfig(BaseConfig):
    DEBUG = False


class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOAD_USERS_ON_BOOT = False
    NOTIFICATIONS_ENABLED = True
    SNS_TOPIC_ARN = "arn:aws:sns:us-east-1:000000000000:submissions"
    SUBMISSION_ATTEMPT_SCOPE = "owner"
    ENFORCE_UPDATE_OWNERSHIP = True
    LOG_LEVEL = "WARNING"
    STATSD_ENABLED = False


config_map = {
    "dev": DevConfig,
    "prod": ProdConfig,
    "testing": TestConfig,
    "default": DevConfig,
}
