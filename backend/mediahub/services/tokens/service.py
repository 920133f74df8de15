# mediahub/services/tokens/service.py
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from mediahub.models.user import User
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.errors import (
    InvalidSignatureError,
    NotFoundError,
    TokenRevokedError,
    UnauthorizedError,
)
from mediahub.services._shared.ports import TokenProvider
from mediahub.services.tokens.dto import RefreshClaims, TokenConfig, TokenPairOut


class TokenService(BaseService):
    """
    Issue, verify and rotate session credentials.

    The live refresh token is stored on the user row. Rotation is a single
    compare-and-swap ``UPDATE`` so that, of two requests presenting the same
    refresh token, at most one succeeds; the other gets
    :class:`TokenRevokedError`.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: TokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter that signs and verifies JWTs.
        :param token_cfg: Token lifetimes; defaults to 15 minutes / 10 days.
        """
        super().__init__()
        self.provider = token_provider
        self.cfg = token_cfg or TokenConfig()

    @staticmethod
    def _claims_for(user: User) -> dict[str, Any]:
        return {"username": user.username, "email": user.email}

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_pair(self, user_id: int, *, claims: dict[str, Any] | None = None) -> TokenPairOut:
        """
        Sign a fresh access/refresh pair for ``user_id``. Nothing is persisted.

        :param user_id: Subject of both tokens.
        :param claims: Extra claims for the access token.
        :returns: Encoded token pair.
        """
        identity = str(user_id)
        access = self.provider.create_access_token(
            identity=identity,
            additional_claims=claims,
            expires_delta=self.cfg.access_expires,
        )
        refresh = self.provider.create_refresh_token(
            identity=identity,
            expires_delta=self.cfg.refresh_expires,
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def issue_session(self, user_id: int) -> TokenPairOut:
        """
        Issue a pair and store its refresh token as the user's live one.

        Any previously stored refresh token stops working.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            pair = self.issue_pair(user.id, claims=self._claims_for(user))
            uow.users.set_refresh_token(user.id, pair.refresh_token)
        self.log.info("session.issued", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Verification & rotation
    # ------------------------------------------------------------------ #

    def verify_refresh(self, token: str) -> RefreshClaims:
        """
        Verify signature, expiry and type of a refresh token.

        :raises InvalidSignatureError: Malformed, wrong type or bad signature.
        :raises TokenExpiredError: Expired token.
        """
        claims = self.provider.decode_refresh(token)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSignatureError("Invalid refresh token") from exc
        return RefreshClaims(
            user_id=user_id,
            jti=str(claims["jti"]),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=UTC),
        )

    def rotate(self, presented: str) -> TokenPairOut:
        """
        Exchange a live refresh token for a new pair.

        :param presented: Refresh token sent by the client.
        :returns: New pair; its refresh token replaces ``presented``.
        :raises UnauthorizedError: Token subject no longer exists.
        :raises TokenRevokedError: ``presented`` is no longer the stored token
            (already rotated, logged out or superseded by a newer login).
        """
        claims = self.verify_refresh(presented)

        with self.rw_uow() as uow:
            user = uow.users.get(claims.user_id)
            if user is None:
                raise UnauthorizedError("Invalid refresh token")

            pair = self.issue_pair(user.id, claims=self._claims_for(user))
            swapped = uow.users.swap_refresh_token(
                user.id, presented=presented, new=pair.refresh_token
            )
            if not swapped:
                self.log.warning(
                    "Refresh token reuse detected", extra={"user_id": claims.user_id}
                )
                raise TokenRevokedError()

        return pair
