"""
Shared column mixins
"""
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """created_at / updated_at columns, set application-side"""
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class SoftDeleteMixin:
    """Rows are flagged inactive instead of being removed"""
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
