"""Principals that can sign in and own employee rows."""
from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TenantMixin


class User(TenantMixin, Base):
    """A sign-in identity; usernames are unique within an account."""

    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("account_id", "username", name="uq_users_account_username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String, index=True)
    password_hash: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String, default="")
    # disabled users can neither sign in nor use an issued token
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
