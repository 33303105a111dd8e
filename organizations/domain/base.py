from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores"""
    return datetime.now(UTC).replace(tzinfo=None)


class TimestampedModel(SQLModel):
    # sa_type, not sa_column: each table needs its own Column
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
