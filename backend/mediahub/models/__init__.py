from mediahub.models.subscription import Subscription
from mediahub.models.user import User
from mediahub.models.video import Video
from mediahub.models.watch_history import WatchHistoryEntry

__all__ = [
    "Subscription",
    "User",
    "Video",
    "WatchHistoryEntry",
]
