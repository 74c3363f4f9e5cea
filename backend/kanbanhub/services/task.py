"""Task service - create, update, move and delete tasks, plus their comments."""

from typing import Any, Sequence

import structlog
from pydantic.alias_generators import to_camel
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.db.base import utcnow
from kanbanhub.exceptions import NotFoundError, ValidationError
from kanbanhub.models.collaboration import Comment
from kanbanhub.models.project import Column, Task, TaskPriority
from kanbanhub.services.activity import ActivityLogService
from kanbanhub.services.board import BoardService

logger = structlog.get_logger()

# Fields a partial update may touch; the rest are owned by the service
UPDATABLE_FIELDS = frozenset({
    "title",
    "description",
    "priority",
    "column_id",
    "assignee_id",
    "due_date",
    "story_points",
})
NON_NULLABLE_FIELDS = frozenset({"title", "priority"})


def _priority_value(priority: TaskPriority | str) -> str:
    if isinstance(priority, TaskPriority):
        return priority.value
    try:
        return TaskPriority(priority).value
    except ValueError:
        raise ValidationError(
            f"Priority must be one of: {', '.join(p.value for p in TaskPriority)}",
            field="priority",
        )


class TaskService:
    """Service for task mutations.

    Each task has a ``position`` inside its column (or inside the project
    backlog when it has no column). Positions are kept dense: removing a
    task closes the gap and inserting one shifts the tasks below it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityLogService(db)

    # =========================================================================
    # Lookups
    # =========================================================================

    async def get(self, task_id: int) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def get_with_comments(self, task_id: int) -> dict[str, Any]:
        task = await self.get(task_id)
        comments = await self.list_comments(task_id)
        return {**task.to_dict(), "comments": [c.to_dict() for c in comments]}

    async def _column_in_project(self, column_id: int, project_id: int) -> Column:
        column = await self.db.get(Column, column_id)
        if column is None or column.project_id != project_id:
            raise ValidationError(
                f"Column {column_id} does not belong to project {project_id}",
                field="columnId",
            )
        return column

    def _lane(self, project_id: int, column_id: int | None) -> list[Any]:
        """WHERE clauses selecting the tasks sharing a column (or the backlog)."""
        if column_id is None:
            return [Task.project_id == project_id, Task.column_id.is_(None)]
        return [Task.column_id == column_id]

    async def _lane_size(
        self, project_id: int, column_id: int | None, exclude_id: int | None = None
    ) -> int:
        stmt = select(func.count(Task.id)).where(*self._lane(project_id, column_id))
        if exclude_id is not None:
            stmt = stmt.where(Task.id != exclude_id)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def _close_gap(self, task: Task) -> None:
        await self.db.execute(
            update(Task)
            .where(
                *self._lane(task.project_id, task.column_id),
                Task.position > task.position,
                Task.id != task.id,
            )
            .values(position=Task.position - 1)
            .execution_options(synchronize_session="fetch")
        )

    async def _place(self, task: Task, column_id: int | None, order: int | None) -> None:
        """Take ``task`` out of its lane and insert it into ``column_id``.

        ``order`` is clamped to the lane length; ``None`` appends.
        """
        await self._close_gap(task)

        size = await self._lane_size(task.project_id, column_id, exclude_id=task.id)
        position = size if order is None else min(order, size)

        await self.db.execute(
            update(Task)
            .where(
                *self._lane(task.project_id, column_id),
                Task.position >= position,
                Task.id != task.id,
            )
            .values(position=Task.position + 1)
            .execution_options(synchronize_session="fetch")
        )

        task.column_id = column_id
        task.position = position

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(
        self,
        project_id: int,
        reporter_id: str,
        title: str,
        priority: TaskPriority | str,
        column_id: int | None = None,
        description: str | None = None,
        assignee_id: str | None = None,
        due_date: Any = None,
        story_points: int | None = None,
    ) -> Task:
        """Create a task at the end of its column.

        Raises:
            NotFoundError: If the project does not exist
            ValidationError: If the column is not part of the project
        """
        await BoardService(self.db).get_project(project_id)
        if column_id is not None:
            await self._column_in_project(column_id, project_id)

        task = Task(
            title=title,
            description=description,
            priority=_priority_value(priority),
            project_id=project_id,
            column_id=column_id,
            position=await self._lane_size(project_id, column_id),
            assignee_id=assignee_id,
            reporter_id=reporter_id,
            due_date=due_date,
            story_points=story_points,
        )
        self.db.add(task)
        await self.db.flush()

        self.activity.log("task", task.id, "create", reporter_id, {"columnId": column_id})
        logger.info(
            "task_created",
            task_id=task.id,
            project_id=project_id,
            column_id=column_id,
        )
        return task

    async def update(self, task_id: int, changes: dict[str, Any], user_id: str) -> Task:
        """Apply a partial update. ``updated_at`` is always refreshed.

        Raises:
            NotFoundError: If the task does not exist
            ValidationError: If a field value is not acceptable
        """
        task = await self.get(task_id)

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationError(f"Field '{field}' cannot be updated", field=to_camel(field))
        for field in NON_NULLABLE_FIELDS & set(changes):
            if changes[field] is None:
                raise ValidationError(f"Field '{field}' cannot be null", field=to_camel(field))

        changes = dict(changes)
        changed_fields = sorted(to_camel(f) for f in changes)
        if "priority" in changes:
            changes["priority"] = _priority_value(changes["priority"])

        if "column_id" in changes:
            column_id = changes.pop("column_id")
            if column_id != task.column_id:
                if column_id is not None:
                    await self._column_in_project(column_id, task.project_id)
                await self._place(task, column_id, None)

        for field, value in changes.items():
            setattr(task, field, value)
        task.updated_at = utcnow()
        await self.db.flush()

        self.activity.log(
            "task", task.id, "update", user_id, {"fields": changed_fields}
        )
        logger.info("task_updated", task_id=task_id)
        return task

    async def move(
        self, task_id: int, column_id: int, user_id: str, order: int | None = None
    ) -> Task:
        """Move a task to ``column_id`` at position ``order``.

        Only ``column_id``, ``position`` and ``updated_at`` change.

        Raises:
            NotFoundError: If the task does not exist
            ValidationError: If the column is not part of the task's project
        """
        task = await self.get(task_id)
        await self._column_in_project(column_id, task.project_id)

        from_column = task.column_id
        await self._place(task, column_id, order)
        task.updated_at = utcnow()
        await self.db.flush()

        self.activity.log(
            "task",
            task.id,
            "move",
            user_id,
            {"fromColumn": from_column, "toColumn": column_id, "position": task.position},
        )
        logger.info(
            "task_moved",
            task_id=task_id,
            from_column=from_column,
            to_column=column_id,
            position=task.position,
        )
        return task

    async def delete(self, task_id: int, user_id: str) -> None:
        """Hard-delete a task. Its comments are left in place.

        Raises:
            NotFoundError: If the task does not exist
        """
        task = await self.get(task_id)
        await self._close_gap(task)
        await self.db.delete(task)
        await self.db.flush()

        self.activity.log("task", task_id, "delete", user_id)
        logger.info("task_deleted", task_id=task_id)

    # =========================================================================
    # Comments
    # =========================================================================

    async def list_comments(self, task_id: int) -> Sequence[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at, Comment.id)
        )
        return result.scalars().all()

    async def add_comment(self, task_id: int, content: str, user_id: str) -> Comment:
        await self.get(task_id)

        comment = Comment(content=content, task_id=task_id, user_id=user_id)
        self.db.add(comment)
        await self.db.flush()

        self.activity.log("comment", comment.id, "create", user_id, {"taskId": task_id})
        logger.info("comment_created", comment_id=comment.id, task_id=task_id)
        return comment
