"""Service layer public API.

Callers import services and their DTOs from :mod:`mediahub.services` without
knowing the internal layout.

Re-exports
----------
- :class:`BaseService` (``mediahub.services._shared.base``)
- :class:`TokenService` and token DTOs (``mediahub.services.tokens``)
- :class:`AuthService` and account DTOs (``mediahub.services.auth``)
- :class:`SubscriptionService` (``mediahub.services.subscriptions``)
- :class:`ProfileService` and profile projections (``mediahub.services.profiles``)
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth import (
    AuthService,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    UpdateAccountIn,
    UserPublicOut,
    WatchRecordOut,
)
from .profiles import ChannelProfileOut, OwnerOut, ProfileService, UserCardOut, WatchedVideoOut
from .subscriptions import SubscriptionService, ToggleOut
from .tokens import RefreshClaims, TokenConfig, TokenPairOut, TokenService

__all__ = [
    "AuthService",
    "BaseService",
    "ChangePasswordIn",
    "ChannelProfileOut",
    "LoginIn",
    "LoginOut",
    "OwnerOut",
    "ProfileService",
    "RefreshClaims",
    "RefreshIn",
    "RegisterIn",
    "SubscriptionService",
    "ToggleOut",
    "TokenConfig",
    "TokenPairOut",
    "TokenService",
    "UpdateAccountIn",
    "UserCardOut",
    "UserPublicOut",
    "WatchRecordOut",
    "WatchedVideoOut",
]
