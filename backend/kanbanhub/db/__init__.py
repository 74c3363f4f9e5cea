"""Database package."""

from kanbanhub.db.base import Base, BaseModel
from kanbanhub.db.session import DBSession, get_db_session

__all__ = ["Base", "BaseModel", "DBSession", "get_db_session"]
