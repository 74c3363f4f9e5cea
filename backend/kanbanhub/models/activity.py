"""Activity log model."""

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from kanbanhub.db.base import BaseModel, JSONType


class ActivityLog(BaseModel):
    """
    Append-only audit trail of mutations.

    Rows are written by the service layer and never updated.
    """

    __tablename__ = "activity_logs"

    entity_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Type of entity affected (workspace, project, column, task, comment)",
    )
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    action: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Action verb (create, update, delete, move, reorder)",
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # "metadata" is reserved on declarative classes
    extra_data: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
        comment="Additional context, e.g. {fromColumn, toColumn}",
    )
