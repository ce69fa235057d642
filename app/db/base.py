"""
db/base.py
----------
Declarative base and shared mixins.

CreatedAtMixin: Adds a server-side created_at column to any model.
                Records are never re-stamped; there is no updated_at.
key_in_range:   Guards lookups against ids the INTEGER key columns cannot hold.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class CreatedAtMixin:
    """Adds a server-side created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )


# Upper bound of the INTEGER primary/foreign key columns (PostgreSQL int4)
MAX_KEY = 2**31 - 1


def key_in_range(value: int) -> bool:
    """Ids outside the column range can never match a row; drivers reject them outright."""
    return 1 <= value <= MAX_KEY
