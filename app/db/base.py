"""
db/base.py
----------
Declarative base and shared mixins.

TimestampMixin: Adds a server-side created_at column to any model.
JSONDocument:   Generic JSON column, JSONB on PostgreSQL.

Internal primary keys are integers; every entity that appears in a URL also
carries a separate random UUID so internal ids are never exposed for lookup.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class TimestampMixin:
    """Adds a server-side created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


def generate_uuid() -> str:
    return str(uuid.uuid4())
