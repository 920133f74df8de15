"""Directed subscriber → channel edge."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mediahub.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin

SUBSCRIPTION_PAIR_CONSTRAINT = "uq_subscriptions_subscriber_id_channel_id"


class Subscription(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    ``subscriber_id`` follows ``channel_id``.

    Both ends are users referenced by id only. Edges are created and deleted,
    never updated; at most one edge exists per ordered pair.
    """

    __tablename__ = "subscriptions"
    __repr_fields__ = ("subscriber_id", "channel_id")

    subscriber_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name=SUBSCRIPTION_PAIR_CONSTRAINT),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
        Index("ix_subscriptions_channel_id", "channel_id"),
    )
