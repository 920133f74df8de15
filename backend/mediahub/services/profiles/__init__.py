from .dto import ChannelProfileOut, OwnerOut, UserCardOut, WatchedVideoOut
from .service import ProfileService

__all__ = [
    "ChannelProfileOut",
    "OwnerOut",
    "ProfileService",
    "UserCardOut",
    "WatchedVideoOut",
]
