# mediahub/services/tokens/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access and refresh tokens issued together.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class RefreshClaims:
    """
    Verified claims of a refresh token.

    :param user_id: Subject as integer user id.
    :type user_id: int
    :param jti: Unique token identifier.
    :type jti: str
    :param expires_at: Expiry instant (UTC).
    :type expires_at: datetime
    """

    user_id: int
    jti: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Token lifetimes.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=10)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenConfig:
        """Build from ``ACCESS_TOKEN_EXPIRY_MINUTES``/``REFRESH_TOKEN_EXPIRY_DAYS``."""
        return cls(
            access_expires=timedelta(minutes=int(config.get("ACCESS_TOKEN_EXPIRY_MINUTES", 15))),
            refresh_expires=timedelta(days=int(config.get("REFRESH_TOKEN_EXPIRY_DAYS", 10))),
        )
