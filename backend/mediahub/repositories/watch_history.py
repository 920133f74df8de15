"""Watch history storage and the enriched history join."""

from __future__ import annotations

from typing import Any, NamedTuple

from sqlalchemy import select
from sqlalchemy.orm import aliased

from mediahub.models.user import User
from mediahub.models.video import Video
from mediahub.models.watch_history import WatchHistoryEntry
from mediahub.repositories.base import BaseRepository


class HistoryRow(NamedTuple):
    """One history entry with its (possibly missing) video and owner."""

    entry: WatchHistoryEntry
    video: Video | None
    owner: User | None


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Append-only history entries per user."""

    model = WatchHistoryEntry

    def append(self, user_id: int, video_id: int) -> WatchHistoryEntry:
        """Append a watch event; repeats are kept as separate entries."""
        return self.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))

    def list_enriched(self, user_id: int) -> list[HistoryRow]:
        """Return the user's history in insertion order, joined to content.

        ``videos`` and their owners are LEFT OUTER joined, so dangling
        references come back with ``video``/``owner`` set to ``None``.
        """
        owner = aliased(User, name="owner")
        stmt: Any = (
            select(WatchHistoryEntry, Video, owner)
            .outerjoin(Video, Video.id == WatchHistoryEntry.video_id)
            .outerjoin(owner, owner.id == Video.owner_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.id.asc())
        )
        return [HistoryRow(*row) for row in self.session.execute(stmt).all()]
