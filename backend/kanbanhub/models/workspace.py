"""Workspace model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kanbanhub.db.base import BaseModel

if TYPE_CHECKING:
    from kanbanhub.models.project import Project


class Workspace(BaseModel):
    """Top-level container owning projects."""

    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="workspace", lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Workspace {self.slug}>"
