"""Task endpoints: detail, update, move, delete and comments."""

from typing import Any, Sequence

import structlog
from fastapi import APIRouter, Response, status

from kanbanhub.api.contracts import api, route
from kanbanhub.api.schemas import CommentCreate, TaskMove, TaskUpdate
from kanbanhub.api.v1.auth import CurrentUser
from kanbanhub.db.session import DBSession
from kanbanhub.models.collaboration import Comment
from kanbanhub.models.project import Task
from kanbanhub.services.task import TaskService

router = APIRouter()
logger = structlog.get_logger()


@route(router, api.tasks["get"])
async def get_task(task_id: int, current_user: CurrentUser, db: DBSession) -> dict[str, Any]:
    """Get a task with its comments."""
    return await TaskService(db).get_with_comments(task_id)


@route(router, api.tasks["update"])
async def update_task(
    task_id: int,
    updates: TaskUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Task:
    """Apply a partial update to a task."""
    task = await TaskService(db).update(
        task_id,
        updates.model_dump(exclude_unset=True),
        user_id=current_user.id,
    )
    await db.commit()
    return task


@route(router, api.tasks["delete"])
async def delete_task(task_id: int, current_user: CurrentUser, db: DBSession) -> Response:
    """Delete a task. Its comments are kept."""
    await TaskService(db).delete(task_id, user_id=current_user.id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@route(router, api.tasks["move"])
async def move_task(
    task_id: int,
    move: TaskMove,
    current_user: CurrentUser,
    db: DBSession,
) -> Task:
    """Move a task to a column, optionally at a given position."""
    task = await TaskService(db).move(
        task_id,
        column_id=move.column_id,
        order=move.order,
        user_id=current_user.id,
    )
    await db.commit()
    return task


# Task Comments
@route(router, api.comments["list"])
async def list_task_comments(task_id: int, current_user: CurrentUser, db: DBSession) -> Sequence[Comment]:
    """List comments on a task, oldest first."""
    service = TaskService(db)
    await service.get(task_id)
    return await service.list_comments(task_id)


@route(router, api.comments["create"])
async def create_task_comment(
    task_id: int,
    comment_data: CommentCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Comment:
    """Comment on a task as the caller."""
    comment = await TaskService(db).add_comment(
        task_id,
        content=comment_data.content,
        user_id=current_user.id,
    )
    await db.commit()
    return comment
