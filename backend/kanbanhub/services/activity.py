"""Activity log service - append-only audit trail of mutations."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.models.activity import ActivityLog

logger = structlog.get_logger()


class ActivityLogService:
    """Records who did what to which entity.

    Entries are added to the caller's session and committed together with
    the mutation they describe.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def log(
        self,
        entity_type: str,
        entity_id: int,
        action: str,
        user_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            user_id=user_id,
            extra_data=metadata,
        )
        self.db.add(entry)

        logger.debug(
            "activity_logged",
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            user_id=user_id,
        )
        return entry
