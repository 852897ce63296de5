from datetime import datetime, UTC


def utcnow() -> datetime:
    # columns hold naive UTC timestamps
    return datetime.now(UTC).replace(tzinfo=None)
