# mediahub/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt as pyjwt
from flask import current_app

from mediahub.services._shared.errors import InvalidSignatureError, TokenExpiredError
from mediahub.services._shared.ports import TokenProvider

REFRESH_TOKEN_TYPE = "refresh"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    JWT adapter.

    * Access tokens go through Flask-JWT-Extended, signed with
      ``JWT_SECRET_KEY`` (= ``ACCESS_TOKEN_SECRET``) so ``@jwt_required``
      style verification on routes works unchanged.
    * Refresh tokens are signed with PyJWT using ``REFRESH_TOKEN_SECRET``.
      Flask-JWT-Extended signs every token type with one key, which would
      make a leaked access key sufficient to forge refresh tokens.

    .. note::
       Requires an active Flask app context.
    """

    refresh_secret: str | None = None
    algorithm: str | None = None

    def _refresh_key(self) -> str:
        return self.refresh_secret or cast(str, current_app.config["REFRESH_TOKEN_SECRET"])

    def _algorithm(self) -> str:
        return self.algorithm or cast(str, current_app.config.get("JWT_ALGORITHM", "HS256"))

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(
                identity=str(identity),
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(self, *, identity: str, expires_delta: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(identity),
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid4().hex,
            "iat": now,
            "nbf": now,
            "exp": now + expires_delta,
        }
        return pyjwt.encode(payload, self._refresh_key(), algorithm=self._algorithm())

    def decode_refresh(self, token: str) -> dict[str, Any]:
        try:
            claims = pyjwt.decode(
                token,
                self._refresh_key(),
                algorithms=[self._algorithm()],
                options={"require": ["exp", "sub", "jti", "type"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Refresh token has expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise InvalidSignatureError("Invalid refresh token") from exc

        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise InvalidSignatureError("Invalid refresh token")
        return cast(dict[str, Any], claims)
