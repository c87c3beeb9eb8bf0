"""SQLAlchemy declarative Base and shared column conventions."""

from sqlalchemy import BigInteger, Column, DateTime, SmallInteger, func
from sqlalchemy.orm import DeclarativeBase

STATUS_ACTIVE = 1
STATUS_INACTIVE = 0

# Columns maintained by the system; never accepted from API payloads.
AUDIT_FIELDS = ("created_by", "updated_by", "created_at", "updated_at")


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class AuditMixin:
    """
    Soft status plus audit columns carried by every mutable table.

    status: 1 = active, 0 = inactive (rows are never hard-deleted).
    updated_at is refreshed by the ORM on every UPDATE.
    """

    status = Column(SmallInteger, nullable=False, default=STATUS_ACTIVE, server_default="1")
    created_by = Column(BigInteger, nullable=True)
    updated_by = Column(BigInteger, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
