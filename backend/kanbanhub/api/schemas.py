"""Request and response schemas shared by the server routes and the client.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kanbanhub.models.project import TaskPriority

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Errors
# =============================================================================


class ErrorResponse(CamelModel):
    """Structured error body."""
    message: str
    field: str | None = None


# =============================================================================
# Workspaces
# =============================================================================


class WorkspaceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)


class WorkspaceResponse(CamelModel):
    id: int
    name: str
    slug: str
    owner_id: str
    created_at: datetime


# =============================================================================
# Projects and columns
# =============================================================================


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=1, max_length=10)
    description: str | None = None


class ProjectResponse(CamelModel):
    id: int
    name: str
    key: str
    description: str | None
    workspace_id: int
    created_at: datetime


class ColumnCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    order: int = Field(..., ge=0)


class ColumnResponse(CamelModel):
    id: int
    name: str
    project_id: int
    order: int
    created_at: datetime


class ColumnOrderUpdate(CamelModel):
    """Column ids in their new left-to-right order."""
    column_ids: list[int]


# =============================================================================
# Tasks
# =============================================================================


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority
    column_id: int | None = None
    assignee_id: str | None = None
    due_date: datetime | None = None
    story_points: int | None = Field(None, ge=0)


class TaskUpdate(CamelModel):
    """Partial task update; only fields present in the body are applied."""
    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    column_id: int | None = None
    assignee_id: str | None = None
    due_date: datetime | None = None
    story_points: int | None = Field(None, ge=0)


class TaskMove(CamelModel):
    column_id: int
    order: int | None = Field(None, ge=0)


class TaskResponse(CamelModel):
    id: int
    title: str
    description: str | None
    priority: TaskPriority
    column_id: int | None
    project_id: int
    position: int
    assignee_id: str | None
    reporter_id: str
    due_date: datetime | None
    story_points: int | None
    created_at: datetime
    updated_at: datetime


class ColumnWithTasks(ColumnResponse):
    tasks: list[TaskResponse]


class ProjectWithColumns(ProjectResponse):
    """The board: project, ranked columns and each column's tasks."""
    columns: list[ColumnWithTasks]


# =============================================================================
# Comments
# =============================================================================


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(CamelModel):
    id: int
    content: str
    task_id: int
    user_id: str
    created_at: datetime


class TaskWithDetails(TaskResponse):
    comments: list[CommentResponse]


# =============================================================================
# Analytics, AI, seed, auth
# =============================================================================


class VelocityPoint(CamelModel):
    date: str
    completed: int


class SubtasksRequest(CamelModel):
    task_description: str = Field(..., min_length=1, max_length=20000)


class SummarizeRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=20000)


class SummaryResponse(CamelModel):
    summary: str


class SeedResponse(CamelModel):
    message: str
    workspace_id: int


class UserResponse(CamelModel):
    id: str
    email: str
    display_name: str
