"""Project, Column and Task models for the Kanban board."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, case
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kanbanhub.db.base import BaseModel

if TYPE_CHECKING:
    from kanbanhub.models.workspace import Workspace

DEFAULT_COLUMN_NAMES = ("Todo", "In Progress", "Done")


class TaskPriority(str, Enum):
    """Task priority levels, lowest first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return list(TaskPriority).index(self)


class Project(BaseModel):
    """A named body of work with a short key."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    key: Mapped[str] = mapped_column(String(10), nullable=False)  # e.g. "PROJ"
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    workspace_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="projects")
    columns: Mapped[list["Column"]] = relationship(
        "Column", back_populates="project", lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Project {self.key}>"


class Column(BaseModel):
    """A ranked lane of tasks within a project.

    ``order`` is not unique; ties fall back to id.
    """

    __tablename__ = "columns"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    project: Mapped["Project"] = relationship("Project", back_populates="columns")

    def __repr__(self) -> str:
        return f"<Column {self.name} order={self.order}>"


class Task(BaseModel):
    """Task within a project, optionally placed in a column."""

    __tablename__ = "tasks"

    # Basic info
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskPriority.MEDIUM.value
    )  # low, medium, high, urgent

    # Placement; a null column means backlog
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    column_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("columns.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Ordering within the column (or within the project backlog)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # People, as identity provider subjects
    assignee_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    reporter_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Planning
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    story_points: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Task {self.title[:30]}>"


# Sort key putting urgent first
priority_rank = case(
    {p.value: p.rank for p in TaskPriority},
    value=Task.priority,
    else_=-1,
)
