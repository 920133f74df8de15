"""Ordered, duplicate-friendly watch history of a user."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from mediahub.core.extensions import db

from .base import PKMixin, ReprMixin


class WatchHistoryEntry(PKMixin, ReprMixin, db.Model):
    """
    One "watched" event.

    ``id`` order is insertion order. ``video_id`` is a weak reference with no
    foreign key: deleting a video leaves the entry in place and readers
    decide how to present the dangling reference.
    """

    __tablename__ = "watch_history"
    __repr_fields__ = ("user_id", "video_id")

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int] = mapped_column(Integer, nullable=False)
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_watch_history_user_id", "user_id", "id"),)
