"""
SQLAlchemy declarative base and common model utilities.

All SQLAlchemy models should inherit from Base.
"""
import ulid
from datetime import datetime, timezone
from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """Generate a new ULID string (26 chars, time-sortable) for primary keys."""
    return ulid.new().str


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.
    
    Usage:
        from app.core.database.base import Base
        
        class Region(Base):
            __tablename__ = "regions"
            
            id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
            name: Mapped[str] = mapped_column(String(255))
    """
    pass


class TimestampMixin:
    """
    Mixin to add created_at and updated_at timestamps to models.

    Timestamps are set on the Python side with microsecond precision so that
    newest-first ordering is stable for rows written within the same second.
    
    Usage:
        class Region(Base, TimestampMixin):
            __tablename__ = "regions"
            id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    """
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
