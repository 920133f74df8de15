"""User model: credentials, public profile and the single live refresh token."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from mediahub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .watch_history import WatchHistoryEntry


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity and channel profile.

    A user plays both relationship roles: subscriber and channel.

    Fields
    ------
    username : str
        Public handle. Stored lowercased and trimmed; unique.
    email : str
        Login email. Stored lowercased and trimmed; unique.
    password_hash : str
        Hash produced by :func:`mediahub.core.security.hash_password`.
        Never serialized.
    full_name : str
        Display name.
    avatar_url : str
        Required avatar URL returned by the media upload service.
    cover_image_url : str | None
        Optional cover image URL.
    refresh_token : str | None
        The one live refresh token. ``NULL`` means no active session (never
        logged in, or logged out). A second login replaces the first
        session's token.
    """

    __tablename__ = "users"
    __repr_fields__ = ("username",)

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(500), nullable=False)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    watch_history: Mapped[list[WatchHistoryEntry]] = relationship(
        "WatchHistoryEntry",
        order_by="WatchHistoryEntry.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
    )

    # Constraints (unique constraints back the lookup indexes)
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize username to lowercase without surrounding whitespace.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip().lower()
        if not v:
            raise ValueError("Username is required.")
        return v
