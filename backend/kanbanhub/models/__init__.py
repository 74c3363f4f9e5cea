"""SQLAlchemy models package."""

from kanbanhub.models.activity import ActivityLog
from kanbanhub.models.collaboration import Comment
from kanbanhub.models.project import (
    DEFAULT_COLUMN_NAMES,
    Column,
    Project,
    Task,
    TaskPriority,
)
from kanbanhub.models.user import User
from kanbanhub.models.workspace import Workspace

__all__ = [
    "ActivityLog",
    "Column",
    "Comment",
    "DEFAULT_COLUMN_NAMES",
    "Project",
    "Task",
    "TaskPriority",
    "User",
    "Workspace",
]
