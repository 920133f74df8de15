# mediahub/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from mediahub.models.user import User
from mediahub.services._shared.ports import MediaFile

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param full_name: Display name.
    :type full_name: str
    :param username: Public handle (normalized by the service).
    :type username: str
    :param email: Login email (normalized by the service).
    :type email: str
    :param password: Raw password (hashed before storage).
    :type password: str
    :param avatar: Required avatar file.
    :type avatar: MediaFile | None
    :param cover_image: Optional cover image file.
    :type cover_image: MediaFile | None
    """

    full_name: str
    username: str
    email: str
    password: str
    avatar: MediaFile | None = None
    cover_image: MediaFile | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one of ``username``/``email`` is required.
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    user_id: int
    old_password: str
    new_password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT (cookie or body).
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class UpdateAccountIn:
    user_id: int
    full_name: str | None = None
    email: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user projection. Never carries the password hash or tokens.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Login result: the user plus a freshly stored token pair.
    """

    user: UserPublicOut
    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class WatchRecordOut:
    id: int
    video_id: int
    watched_at: datetime | None
