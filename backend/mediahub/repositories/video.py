"""Read-only access to content entities."""

from __future__ import annotations

from sqlalchemy import select

from mediahub.models.video import Video
from mediahub.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Lookups against :class:`Video`; this core never writes videos."""

    model = Video

    def exists_id(self, video_id: int) -> bool:
        """Return ``True`` when a video with ``video_id`` exists."""
        stmt = select(Video.id).where(Video.id == video_id).limit(1)
        return self.session.execute(stmt).first() is not None
