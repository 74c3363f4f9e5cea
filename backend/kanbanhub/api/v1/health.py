"""Health check endpoints."""

from fastapi import APIRouter
from sqlalchemy import text

from kanbanhub.config import get_settings
from kanbanhub.db.session import DBSession

router = APIRouter()
settings = get_settings()


@router.get("/health/ready")
async def readiness_check(db: DBSession) -> dict[str, str | dict[str, str]]:
    """Readiness check including database connectivity."""
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {e.__class__.__name__}"

    overall_status = "healthy" if all(v == "healthy" for v in checks.values()) else "unhealthy"

    return {
        "status": overall_status,
        "version": settings.app_version,
        "checks": checks,
    }
