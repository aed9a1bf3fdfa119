from datetime import datetime, timezone

from ..extensions import db


def utcnow():
    """Naive UTC timestamp, matching what SQLite/Postgres DateTime columns hand back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, default=utcnow, server_default=db.func.now(), onupdate=utcnow)


def isoformat(value):
    return value.isoformat() if value is not None else None
