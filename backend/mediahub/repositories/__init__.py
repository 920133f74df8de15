"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from mediahub.repositories.base import BaseRepository
from mediahub.repositories.subscription import SubscriptionRepository
from mediahub.repositories.user import UserRepository
from mediahub.repositories.video import VideoRepository
from mediahub.repositories.watch_history import HistoryRow, WatchHistoryRepository

__all__ = [
    # Base
    "BaseRepository",
    # Domain
    "HistoryRow",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
