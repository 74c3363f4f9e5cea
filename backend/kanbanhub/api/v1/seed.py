"""Demo data endpoint."""

from fastapi import APIRouter

from kanbanhub.api.contracts import api, route
from kanbanhub.api.schemas import SeedResponse
from kanbanhub.api.v1.auth import CurrentUser
from kanbanhub.db.session import DBSession
from kanbanhub.services.seed import SeedService

router = APIRouter()


@route(router, api.seed["demo"])
async def seed_demo_data(current_user: CurrentUser, db: DBSession) -> SeedResponse:
    """Create a demo workspace, project and tasks for the caller."""
    workspace = await SeedService(db).seed_demo(current_user.id)
    await db.commit()
    return SeedResponse(message="Seed data created successfully", workspace_id=workspace.id)
