"""Services package."""

from kanbanhub.services.activity import ActivityLogService
from kanbanhub.services.analytics import AnalyticsService, VelocityReport
from kanbanhub.services.board import BoardService
from kanbanhub.services.seed import SeedService
from kanbanhub.services.task import TaskService
from kanbanhub.services.workspace import WorkspaceService

__all__ = [
    "ActivityLogService",
    "AnalyticsService",
    "BoardService",
    "SeedService",
    "TaskService",
    "VelocityReport",
    "WorkspaceService",
]
