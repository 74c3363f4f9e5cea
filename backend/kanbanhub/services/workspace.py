"""Workspace service."""

from typing import Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.exceptions import NotFoundError, ValidationError
from kanbanhub.models.workspace import Workspace
from kanbanhub.services.activity import ActivityLogService

logger = structlog.get_logger()


class WorkspaceService:
    """Create and look up workspaces."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityLogService(db)

    async def list_for_owner(self, owner_id: str) -> Sequence[Workspace]:
        result = await self.db.execute(
            select(Workspace)
            .where(Workspace.owner_id == owner_id)
            .order_by(Workspace.created_at, Workspace.id)
        )
        return result.scalars().all()

    async def get(self, workspace_id: int) -> Workspace:
        workspace = await self.db.get(Workspace, workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace", workspace_id)
        return workspace

    async def slug_taken(self, slug: str) -> bool:
        result = await self.db.execute(select(Workspace.id).where(Workspace.slug == slug))
        return result.scalar_one_or_none() is not None

    async def create(self, name: str, slug: str, owner_id: str) -> Workspace:
        """Create a workspace owned by ``owner_id``.

        Raises:
            ValidationError: If the slug is already in use
        """
        if await self.slug_taken(slug):
            raise ValidationError("Slug is already in use", field="slug")

        workspace = Workspace(name=name, slug=slug, owner_id=owner_id)
        self.db.add(workspace)
        await self.db.flush()

        self.activity.log("workspace", workspace.id, "create", owner_id, {"slug": slug})
        logger.info("workspace_created", workspace_id=workspace.id, slug=slug)
        return workspace
