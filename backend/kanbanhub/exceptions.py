"""Domain exceptions raised by the service layer.

The API layer turns these into ``{"message": ..., "field": ...}`` bodies,
see ``kanbanhub.main``.
"""

from typing import Optional


class KanbanError(Exception):
    """Base exception for board and task operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(KanbanError):
    """Input is well formed but not acceptable (HTTP 400)."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NotFoundError(KanbanError):
    """Referenced entity does not exist (HTTP 404)."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")
