"""
DTOs for ProfileService.

Denormalized, read-only projections assembled from joins and counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from mediahub.models.user import User
from mediahub.models.video import Video


@dataclass(frozen=True, slots=True)
class UserCardOut:
    """
    Compact user projection for subscriber/channel listings.
    """

    id: int
    username: str
    full_name: str
    avatar_url: str
    cover_image_url: str | None

    @classmethod
    def from_model(cls, user: User) -> UserCardOut:
        return cls(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
        )


@dataclass(frozen=True, slots=True)
class OwnerOut:
    id: int
    username: str
    full_name: str
    avatar_url: str

    @classmethod
    def from_model(cls, user: User) -> OwnerOut:
        return cls(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
        )


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page.

    :param subscribers_count: Edges whose channel is this user.
    :type subscribers_count: int
    :param subscribed_to_count: Edges whose subscriber is this user.
    :type subscribed_to_count: int
    :param is_subscribed: Whether the viewer follows this channel
        (always ``False`` for anonymous viewers).
    :type is_subscribed: bool
    """

    id: int
    full_name: str
    username: str
    avatar_url: str
    cover_image_url: str | None
    email: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool


@dataclass(frozen=True, slots=True)
class WatchedVideoOut:
    """
    One watch-history item. ``owner`` is ``None`` when the owner is gone.
    """

    id: int
    title: str
    description: str | None
    thumbnail_url: str | None
    video_url: str
    duration: int
    views: int
    created_at: datetime | None
    owner: OwnerOut | None

    @classmethod
    def from_model(cls, video: Video, owner: User | None) -> WatchedVideoOut:
        return cls(
            id=video.id,
            title=video.title,
            description=video.description,
            thumbnail_url=video.thumbnail_url,
            video_url=video.video_url,
            duration=video.duration,
            views=video.views,
            created_at=video.created_at,
            owner=OwnerOut.from_model(owner) if owner is not None else None,
        )
