"""SQLAlchemy model for the key/value table backing the collections."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base


class KeyValueEntry(Base):
    """One row per store key; ``value`` holds the encoded collection text."""

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
