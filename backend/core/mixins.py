import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive values read back from SQLite."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class UUIDPrimaryKeyMixin:
    """Opaque string identifiers, portable across SQLite and PostgreSQL"""
    id = Column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    # Python-side defaults keep microsecond precision on SQLite too
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow,
                        onupdate=utcnow, nullable=False)
