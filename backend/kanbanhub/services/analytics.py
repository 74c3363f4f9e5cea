"""Project analytics."""

from dataclasses import dataclass, field
from typing import Literal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

VelocityStatus = Literal["computed", "not-computed"]


@dataclass
class VelocityPoint:
    date: str
    completed: int


@dataclass
class VelocityReport:
    """Completed-task counts per day.

    ``status`` tells callers whether ``points`` reflects real data.
    """
    project_id: int
    status: VelocityStatus
    points: list[VelocityPoint] = field(default_factory=list)


class AnalyticsService:
    """Project velocity reporting.

    Completion history is not tracked yet, so velocity is reported as
    not computed instead of being estimated.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_project_velocity(self, project_id: int) -> VelocityReport:
        logger.debug("velocity_not_computed", project_id=project_id)
        return VelocityReport(project_id=project_id, status="not-computed")
