"""API router package."""

from fastapi import APIRouter

from kanbanhub.api.v1 import ai, auth, health, projects, seed, tasks, workspaces

router = APIRouter()

# Paths come from kanbanhub.api.contracts, so routers carry no prefix
router.include_router(health.router, tags=["Health"])
router.include_router(auth.router, tags=["Authentication"])
router.include_router(workspaces.router, tags=["Workspaces"])
router.include_router(projects.router, tags=["Projects"])
router.include_router(tasks.router, tags=["Tasks"])
router.include_router(ai.router, tags=["AI"])
router.include_router(seed.router, tags=["Seed"])
