"""User model mirroring identities issued by the auth provider."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from kanbanhub.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Authenticated user.

    The primary key is the subject claim of the identity provider, so it is
    a string rather than a generated integer.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
