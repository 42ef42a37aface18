# WorkHours - Base Model and Mixins

from datetime import datetime

from sqlalchemy import DateTime, MetaData
from app.config import get_settings
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


settings = get_settings()
SCHEMA = settings.db_schema or None

# Use a metadata instance with a default schema so models and Alembic agree
_metadata = MetaData(schema=SCHEMA) if SCHEMA else MetaData()


def qualified(table_column: str) -> str:
    """Prefix a 'table.column' foreign key target with the configured schema."""
    return f"{SCHEMA}.{table_column}" if SCHEMA else table_column


class Base(DeclarativeBase):
    """Base class for all models."""
    metadata = _metadata


class TimestampMixin:
    """Mixin that adds created_at timestamp to models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
