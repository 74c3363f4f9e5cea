"""Task comments."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kanbanhub.db.base import BaseModel


class Comment(BaseModel):
    """Comment on a task.

    ``task_id`` carries no foreign key: deleting a task leaves its
    comments in place.
    """

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    task_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Comment {self.id} on task={self.task_id}>"
