"""Board, column, project task and analytics endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Response, status

from kanbanhub.api.contracts import api, route
from kanbanhub.api.schemas import ColumnCreate, ColumnOrderUpdate, TaskCreate, VelocityPoint
from kanbanhub.api.v1.auth import CurrentUser
from kanbanhub.db.session import DBSession
from kanbanhub.models.project import Column, Task
from kanbanhub.services.analytics import AnalyticsService
from kanbanhub.services.board import BoardService
from kanbanhub.services.task import TaskService

router = APIRouter()
logger = structlog.get_logger()

VELOCITY_STATUS_HEADER = "X-Velocity-Status"


@route(router, api.projects["board"])
async def get_project_board(project_id: int, current_user: CurrentUser, db: DBSession) -> dict[str, Any]:
    """Get the project with its ranked columns and their tasks."""
    return await BoardService(db).get_project_board(project_id)


# Columns
@route(router, api.columns["create"])
async def create_column(
    project_id: int,
    column_data: ColumnCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Column:
    """Add a column at the given rank."""
    column = await BoardService(db).create_column(
        project_id=project_id,
        name=column_data.name,
        order=column_data.order,
        user_id=current_user.id,
    )
    await db.commit()
    return column


@route(router, api.columns["update_order"])
async def update_column_order(
    project_id: int,
    order_data: ColumnOrderUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Response:
    """Re-rank the project's columns in the given order."""
    await BoardService(db).update_column_order(
        project_id=project_id,
        column_ids=order_data.column_ids,
        user_id=current_user.id,
    )
    await db.commit()
    return Response(status_code=status.HTTP_200_OK)


# Tasks
@route(router, api.tasks["create"])
async def create_task(
    project_id: int,
    task_data: TaskCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Task:
    """Create a task reported by the caller."""
    task = await TaskService(db).create(
        project_id=project_id,
        reporter_id=current_user.id,
        **task_data.model_dump(),
    )
    await db.commit()
    return task


# Analytics
@route(router, api.analytics["velocity"])
async def get_project_velocity(
    project_id: int,
    response: Response,
    current_user: CurrentUser,
    db: DBSession,
) -> list[VelocityPoint]:
    """Tasks completed per day.

    ``X-Velocity-Status`` is ``not-computed`` while completion history is
    not tracked; the body is then empty.
    """
    report = await AnalyticsService(db).get_project_velocity(project_id)
    response.headers[VELOCITY_STATUS_HEADER] = report.status
    return [VelocityPoint(date=p.date, completed=p.completed) for p in report.points]
