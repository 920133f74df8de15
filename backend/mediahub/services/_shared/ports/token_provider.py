from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing access/refresh JWTs and verifying refresh tokens.

    Access and refresh tokens are signed with independent keys. Every token
    carries ``sub`` (user id as string), ``type``, ``jti``, ``iat`` and
    ``exp`` claims.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str: ...

    def create_refresh_token(self, *, identity: str, expires_delta: timedelta) -> str: ...

    def decode_refresh(self, token: str) -> dict[str, Any]:
        """Verify a refresh token and return its claims.

        :raises InvalidSignatureError: Malformed, wrong type or bad signature.
        :raises TokenExpiredError: Valid signature but expired.
        """
        ...
