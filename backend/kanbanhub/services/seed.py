"""Demo data for a fresh account."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.models.project import TaskPriority
from kanbanhub.models.workspace import Workspace
from kanbanhub.services.board import BoardService
from kanbanhub.services.task import TaskService
from kanbanhub.services.workspace import WorkspaceService

logger = structlog.get_logger()

DEMO_SLUG = "demo-workspace"

DEMO_TASKS = [
    {
        "title": "Design Homepage",
        "description": "Create high-fidelity mockups for the new homepage.",
        "priority": TaskPriority.HIGH,
        "story_points": 5,
    },
    {
        "title": "Implement Auth",
        "description": "Set up single sign-on for user login.",
        "priority": TaskPriority.URGENT,
        "story_points": 8,
    },
]


class SeedService:
    """Creates a demo workspace, project and tasks for a user."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.workspaces = WorkspaceService(db)
        self.boards = BoardService(db)
        self.tasks = TaskService(db)

    async def _free_slug(self) -> str:
        slug = DEMO_SLUG
        suffix = 1
        while await self.workspaces.slug_taken(slug):
            suffix += 1
            slug = f"{DEMO_SLUG}-{suffix}"
        return slug

    async def seed_demo(self, user_id: str) -> Workspace:
        workspace = await self.workspaces.create(
            name="Demo Workspace",
            slug=await self._free_slug(),
            owner_id=user_id,
        )
        project = await self.boards.create_project(
            workspace_id=workspace.id,
            name="Website Redesign",
            key="WEB",
            description="Redesigning the corporate website.",
            user_id=user_id,
        )

        columns = await self.boards.list_columns(project.id)
        for task in DEMO_TASKS:
            await self.tasks.create(
                project_id=project.id,
                reporter_id=user_id,
                column_id=columns[0].id,
                **task,
            )

        logger.info("demo_data_seeded", workspace_id=workspace.id, project_id=project.id)
        return workspace
