"""SQLAlchemy Base class and common model mixins."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Automatically generate __tablename__ from class name
    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Generate table name from class name (CamelCase to snake_case)."""
        name = cls.__name__
        return "".join(
            ["_" + c.lower() if c.isupper() else c for c in name]
        ).lstrip("_") + "s"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary keyed by attribute name."""
        return {
            attr.key: getattr(self, attr.key)
            for attr in self.__mapper__.column_attrs
        }


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps.

    Values are assigned on the Python side as well so they are available
    right after a flush without a round trip.
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


class IntegerIDMixin:
    """Mixin for autoincrement integer primary key."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class BaseModel(Base, IntegerIDMixin, TimestampMixin):
    """Base model with integer primary key and timestamps."""

    __abstract__ = True
