"""Workspace and project listing/creation endpoints."""

from typing import Sequence

import structlog
from fastapi import APIRouter

from kanbanhub.api.contracts import api, route
from kanbanhub.api.schemas import ProjectCreate, WorkspaceCreate
from kanbanhub.api.v1.auth import CurrentUser
from kanbanhub.db.session import DBSession
from kanbanhub.models.project import Project
from kanbanhub.models.workspace import Workspace
from kanbanhub.services.board import BoardService
from kanbanhub.services.workspace import WorkspaceService

router = APIRouter()
logger = structlog.get_logger()


@route(router, api.workspaces["list"])
async def list_workspaces(current_user: CurrentUser, db: DBSession) -> Sequence[Workspace]:
    """List workspaces owned by the caller."""
    return await WorkspaceService(db).list_for_owner(current_user.id)


@route(router, api.workspaces["create"])
async def create_workspace(
    workspace_data: WorkspaceCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Workspace:
    """Create a workspace owned by the caller."""
    workspace = await WorkspaceService(db).create(
        name=workspace_data.name,
        slug=workspace_data.slug,
        owner_id=current_user.id,
    )
    await db.commit()
    return workspace


@route(router, api.workspaces["get"])
async def get_workspace(workspace_id: int, current_user: CurrentUser, db: DBSession) -> Workspace:
    """Get a workspace by id."""
    return await WorkspaceService(db).get(workspace_id)


@route(router, api.projects["list"])
async def list_projects(workspace_id: int, current_user: CurrentUser, db: DBSession) -> Sequence[Project]:
    """List the projects of a workspace."""
    return await BoardService(db).list_projects(workspace_id)


@route(router, api.projects["create"])
async def create_project(
    workspace_id: int,
    project_data: ProjectCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Project:
    """Create a project with its default Todo / In Progress / Done columns."""
    project = await BoardService(db).create_project(
        workspace_id=workspace_id,
        name=project_data.name,
        key=project_data.key,
        description=project_data.description,
        user_id=current_user.id,
    )
    await db.commit()
    return project
