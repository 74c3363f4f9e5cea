"""Board service - projects, their ranked columns and board assembly."""

from collections import defaultdict
from typing import Any, Sequence

import structlog
from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.exceptions import NotFoundError, ValidationError
from kanbanhub.models.project import (
    DEFAULT_COLUMN_NAMES,
    Column,
    Project,
    Task,
    priority_rank,
)
from kanbanhub.services.activity import ActivityLogService
from kanbanhub.services.workspace import WorkspaceService

logger = structlog.get_logger()


class BoardService:
    """Service for projects, columns and the assembled board.

    Methods only flush; the caller commits, so each multi-row write lands
    in a single transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityLogService(db)

    # =========================================================================
    # Projects
    # =========================================================================

    async def list_projects(self, workspace_id: int) -> Sequence[Project]:
        result = await self.db.execute(
            select(Project)
            .where(Project.workspace_id == workspace_id)
            .order_by(Project.created_at, Project.id)
        )
        return result.scalars().all()

    async def get_project(self, project_id: int) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def create_project(
        self,
        workspace_id: int,
        name: str,
        key: str,
        user_id: str,
        description: str | None = None,
    ) -> Project:
        """Create a project together with its default columns.

        The project row and the "Todo", "In Progress" and "Done" columns
        (ranks 0, 1, 2) are flushed in the same transaction.

        Raises:
            NotFoundError: If the workspace does not exist
        """
        await WorkspaceService(self.db).get(workspace_id)

        project = Project(
            name=name,
            key=key,
            description=description,
            workspace_id=workspace_id,
        )
        self.db.add(project)
        await self.db.flush()

        self.db.add_all(
            Column(name=column_name, project_id=project.id, order=rank)
            for rank, column_name in enumerate(DEFAULT_COLUMN_NAMES)
        )
        await self.db.flush()

        self.activity.log("project", project.id, "create", user_id, {"key": key})
        logger.info(
            "project_created",
            project_id=project.id,
            workspace_id=workspace_id,
            key=key,
        )
        return project

    # =========================================================================
    # Columns
    # =========================================================================

    async def list_columns(self, project_id: int) -> Sequence[Column]:
        result = await self.db.execute(
            select(Column)
            .where(Column.project_id == project_id)
            .order_by(Column.order, Column.id)
        )
        return result.scalars().all()

    async def create_column(
        self, project_id: int, name: str, order: int, user_id: str
    ) -> Column:
        await self.get_project(project_id)

        column = Column(name=name, project_id=project_id, order=order)
        self.db.add(column)
        await self.db.flush()

        self.activity.log("column", column.id, "create", user_id, {"order": order})
        logger.info("column_created", column_id=column.id, project_id=project_id)
        return column

    async def update_column_order(
        self, project_id: int, column_ids: list[int], user_id: str
    ) -> None:
        """Re-rank columns so that ``column_ids[i]`` gets order ``i``.

        All ranks are written by one UPDATE statement.

        Raises:
            ValidationError: If an id is repeated or does not belong to the project
        """
        if not column_ids:
            return

        if len(set(column_ids)) != len(column_ids):
            raise ValidationError("Column ids must be unique", field="columnIds")

        result = await self.db.execute(
            select(Column.id).where(
                Column.project_id == project_id,
                Column.id.in_(column_ids),
            )
        )
        found = set(result.scalars().all())
        unknown = [cid for cid in column_ids if cid not in found]
        if unknown:
            raise ValidationError(
                f"Columns {unknown} do not belong to project {project_id}",
                field="columnIds",
            )

        ranks = {column_id: rank for rank, column_id in enumerate(column_ids)}
        await self.db.execute(
            update(Column)
            .where(Column.id.in_(column_ids))
            .values(order=case(ranks, value=Column.id))
            .execution_options(synchronize_session="fetch")
        )

        self.activity.log(
            "project", project_id, "reorder", user_id, {"columnIds": column_ids}
        )
        logger.info("columns_reordered", project_id=project_id, count=len(column_ids))

    # =========================================================================
    # Board
    # =========================================================================

    async def get_project_board(self, project_id: int) -> dict[str, Any]:
        """Assemble the project, its ranked columns and each column's tasks.

        Columns are ordered by ``order`` (then id). Tasks inside a column are
        ordered by ``position``, then priority (urgent first), then id.
        Backlog tasks (no column) are not part of the board.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.get_project(project_id)
        columns = await self.list_columns(project_id)

        tasks_by_column: dict[int, list[dict[str, Any]]] = defaultdict(list)
        if columns:
            result = await self.db.execute(
                select(Task)
                .where(Task.column_id.in_([c.id for c in columns]))
                .order_by(Task.position, priority_rank.desc(), Task.id)
            )
            for task in result.scalars().all():
                tasks_by_column[task.column_id].append(task.to_dict())

        return {
            **project.to_dict(),
            "columns": [
                {**column.to_dict(), "tasks": tasks_by_column[column.id]}
                for column in columns
            ],
        }
