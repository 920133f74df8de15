"""Subscription edge storage: atomic toggle, counts and membership joins."""

from __future__ import annotations

import logging
from typing import cast

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from mediahub.models.subscription import SUBSCRIPTION_PAIR_CONSTRAINT, Subscription
from mediahub.models.user import User
from mediahub.repositories.base import BaseRepository, affected_rows

log = logging.getLogger(__name__)

_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence for directed ``subscriber → channel`` edges.

    Every write is keyed on the full ``(subscriber_id, channel_id)`` pair.
    """

    model = Subscription

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    # ------------------------------- Writes ----------------------------------

    def delete_edge(self, subscriber_id: int, channel_id: int) -> bool:
        """Delete the edge for the pair. Returns ``True`` if a row was removed."""
        stmt = delete(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return affected_rows(self.session.execute(stmt)) > 0

    def insert_edge(self, subscriber_id: int, channel_id: int) -> bool:
        """Insert the edge unless it already exists.

        PostgreSQL and SQLite use ``INSERT ... ON CONFLICT DO NOTHING`` on the
        pair. Other dialects run a plain insert inside a SAVEPOINT and treat a
        violation of the pair constraint as "already present".

        :returns: ``True`` if a row was inserted, ``False`` if it already existed.
        :rtype: bool
        """
        table = Subscription.__table__
        values = {"subscriber_id": subscriber_id, "channel_id": channel_id}
        dialect = self.session.connection().dialect.name

        upsert = _UPSERT_INSERTS.get(dialect)
        if upsert is not None:
            stmt = (
                upsert(table)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["subscriber_id", "channel_id"])
            )
            return affected_rows(self.session.execute(stmt)) == 1

        try:
            with self.session.begin_nested():
                self.session.execute(insert(table).values(**values))
        except IntegrityError as exc:
            if SUBSCRIPTION_PAIR_CONSTRAINT not in str(exc.orig).lower():
                raise
            log.debug("Subscription already present for %s -> %s", subscriber_id, channel_id)
            return False
        return True

    def toggle(self, subscriber_id: int, channel_id: int) -> bool:
        """Flip the edge state for the pair.

        Conditional delete first; when nothing was deleted, insert-if-absent.
        Toggling ``(a, b)`` never touches ``(a, c)`` or ``(x, b)``.

        :returns: Resulting state, ``True`` when subscribed.
        :rtype: bool
        """
        if self.delete_edge(subscriber_id, channel_id):
            return False
        self.insert_edge(subscriber_id, channel_id)
        return True

    # ------------------------------- Reads -----------------------------------

    def exists_edge(self, subscriber_id: int, channel_id: int) -> bool:
        return self.exists(subscriber_id=subscriber_id, channel_id=channel_id)

    def count_subscribers(self, channel_id: int) -> int:
        """Number of edges pointing at ``channel_id``."""
        stmt = select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_subscriptions(self, subscriber_id: int) -> int:
        """Number of edges leaving ``subscriber_id``."""
        stmt = select(func.count(Subscription.id)).where(
            Subscription.subscriber_id == subscriber_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def list_subscribers(self, channel_id: int) -> list[User]:
        """Users subscribed to ``channel_id``, oldest edge first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.id.asc())
        )
        return cast(list[User], list(self.session.execute(stmt).scalars().all()))

    def list_channels(self, subscriber_id: int) -> list[User]:
        """Channels ``subscriber_id`` follows, oldest edge first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.id.asc())
        )
        return cast(list[User], list(self.session.execute(stmt).scalars().all()))
