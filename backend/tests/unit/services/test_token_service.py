"""TokenService: issuance, verification and single-use refresh rotation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from flask import current_app
from freezegun import freeze_time

from mediahub.models import User
from mediahub.services import TokenPairOut
from mediahub.services._shared.errors import (
    InvalidSignatureError,
    NotFoundError,
    TokenExpiredError,
    TokenRevokedError,
    UnauthorizedError,
)
from tests.factories.user import UserFactory


def _secret(kind: str) -> str:
    return current_app.config[f"{kind}_TOKEN_SECRET"]


def _decode(token: str, secret: str) -> dict:
    return pyjwt.decode(token, secret, algorithms=["HS256"])


class TestIssuance:
    def test_pair_uses_independent_keys(self, token_service):
        pair = token_service.issue_pair(42, claims={"username": "alice"})

        access = _decode(pair.access_token, _secret("ACCESS"))
        refresh = _decode(pair.refresh_token, _secret("REFRESH"))

        assert access["sub"] == "42"
        assert access["username"] == "alice"
        assert refresh["sub"] == "42"
        assert refresh["type"] == "refresh"
        with pytest.raises(pyjwt.InvalidSignatureError):
            _decode(pair.refresh_token, _secret("ACCESS"))

    def test_lifetimes(self, token_service):
        pair = token_service.issue_pair(1)

        access = _decode(pair.access_token, _secret("ACCESS"))
        refresh = _decode(pair.refresh_token, _secret("REFRESH"))

        assert access["exp"] - access["iat"] == 15 * 60
        assert refresh["exp"] - refresh["iat"] == 10 * 24 * 3600

    def test_each_refresh_token_is_unique(self, token_service):
        first, second = token_service.issue_pair(1), token_service.issue_pair(1)
        assert first.refresh_token != second.refresh_token

    def test_issue_session_stores_refresh_token(self, token_service, session):
        user = UserFactory(username="alice")

        pair = token_service.issue_session(user.id)

        assert isinstance(pair, TokenPairOut)
        assert session.get(User, user.id).refresh_token == pair.refresh_token
        claims = _decode(pair.access_token, _secret("ACCESS"))
        assert claims["username"] == "alice"
        assert claims["email"] == user.email

    def test_issue_session_unknown_user(self, token_service):
        with pytest.raises(NotFoundError):
            token_service.issue_session(123_456)


class TestVerification:
    def test_valid_refresh_token(self, token_service):
        pair = token_service.issue_pair(7)

        claims = token_service.verify_refresh(pair.refresh_token)

        assert claims.user_id == 7
        assert claims.jti
        assert claims.expires_at > datetime.now(UTC)

    def test_access_token_is_not_a_refresh_token(self, token_service):
        pair = token_service.issue_pair(7)
        with pytest.raises(InvalidSignatureError):
            token_service.verify_refresh(pair.access_token)

    def test_token_signed_with_access_key_is_rejected(self, token_service):
        forged = pyjwt.encode(
            {
                "sub": "7",
                "type": "refresh",
                "jti": "x",
                "exp": datetime.now(UTC) + timedelta(days=1),
            },
            _secret("ACCESS"),
            algorithm="HS256",
        )
        with pytest.raises(InvalidSignatureError):
            token_service.verify_refresh(forged)

    def test_wrong_type_claim_is_rejected(self, token_service):
        token = pyjwt.encode(
            {
                "sub": "7",
                "type": "access",
                "jti": "x",
                "exp": datetime.now(UTC) + timedelta(days=1),
            },
            _secret("REFRESH"),
            algorithm="HS256",
        )
        with pytest.raises(InvalidSignatureError):
            token_service.verify_refresh(token)

    @pytest.mark.parametrize("garbage", ["", "abc", "a.b.c"])
    def test_malformed_token(self, token_service, garbage):
        with pytest.raises(InvalidSignatureError):
            token_service.verify_refresh(garbage)

    def test_expired_refresh_token(self, token_service):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            pair = token_service.issue_pair(7)
            frozen.move_to("2026-01-11 12:00:01")
            with pytest.raises(TokenExpiredError):
                token_service.verify_refresh(pair.refresh_token)

    def test_refresh_token_valid_until_expiry(self, token_service):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            pair = token_service.issue_pair(7)
            frozen.move_to("2026-01-11 11:59:00")
            assert token_service.verify_refresh(pair.refresh_token).user_id == 7


class TestRotation:
    def test_rotate_replaces_stored_token(self, token_service, session):
        user = UserFactory()
        first = token_service.issue_session(user.id)

        second = token_service.rotate(first.refresh_token)

        assert second.refresh_token != first.refresh_token
        assert session.get(User, user.id).refresh_token == second.refresh_token

    def test_reused_token_is_revoked(self, token_service, session, caplog):
        user = UserFactory()
        first = token_service.issue_session(user.id)
        second = token_service.rotate(first.refresh_token)

        with caplog.at_level(logging.WARNING), pytest.raises(TokenRevokedError):
            token_service.rotate(first.refresh_token)

        assert "reuse" in caplog.text
        # The live token is untouched by the failed attempt
        assert session.get(User, user.id).refresh_token == second.refresh_token
        assert token_service.rotate(second.refresh_token).refresh_token

    def test_new_login_supersedes_previous_session(self, token_service):
        user = UserFactory()
        old = token_service.issue_session(user.id)
        token_service.issue_session(user.id)

        with pytest.raises(TokenRevokedError):
            token_service.rotate(old.refresh_token)

    def test_token_never_stored_is_revoked(self, token_service):
        user = UserFactory()
        session_pair = token_service.issue_session(user.id)
        stray = token_service.issue_pair(user.id)

        assert stray.refresh_token != session_pair.refresh_token
        with pytest.raises(TokenRevokedError):
            token_service.rotate(stray.refresh_token)

    def test_unknown_subject(self, token_service):
        pair = token_service.issue_pair(999_999)

        with pytest.raises(UnauthorizedError) as info:
            token_service.rotate(pair.refresh_token)
        assert not isinstance(info.value, TokenRevokedError)

    def test_expired_token_is_not_rotated(self, token_service, session):
        user = UserFactory()
        with freeze_time("2026-01-01 12:00:00") as frozen:
            pair = token_service.issue_session(user.id)
            frozen.move_to("2026-02-01")
            with pytest.raises(TokenExpiredError):
                token_service.rotate(pair.refresh_token)

        assert session.get(User, user.id).refresh_token == pair.refresh_token
