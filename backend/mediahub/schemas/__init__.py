"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ChangePasswordSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .profile import (
    ChannelProfileSchema,
    OwnerSchema,
    ToggleSchema,
    UserCardSchema,
    WatchedVideoSchema,
)
from .user import LoginResponseSchema, UpdateAccountSchema, UserSchema, WatchRecordSchema

__all__ = [
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "OwnerSchema",
    "RefreshSchema",
    "RegisterSchema",
    "ToggleSchema",
    "TokenPairSchema",
    "UpdateAccountSchema",
    "UserCardSchema",
    "UserSchema",
    "WatchRecordSchema",
    "WatchedVideoSchema",
]
