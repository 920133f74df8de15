"""Shared API helpers: auth guards, response envelope, cookies, service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from werkzeug.datastructures import FileStorage

from mediahub.infra.jwt import JWTTokenProvider
from mediahub.infra.media import get_media_uploader
from mediahub.services import (
    AuthService,
    ProfileService,
    SubscriptionService,
    TokenConfig,
    TokenPairOut,
    TokenService,
)
from mediahub.services._shared.ports import MediaFile

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# ------------------------------- Auth guards ---------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (header or cookie)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(func: F) -> F:
    """Verify an access token when one is present; anonymous otherwise."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=True)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int | None:
    """Return the verified subject as ``int``, or ``None`` when anonymous."""
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


# ------------------------------ Responses ------------------------------------


def json_response(payload: Any, *, status: int = 200, message: str = "Success") -> Response:
    """Wrap ``payload`` in the ``{status, data, message}`` envelope."""

    response = jsonify({"status": status, "data": payload, "message": message})
    response.status_code = status
    return response


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("AUTH_COOKIE_SECURE", True)),
        "samesite": current_app.config.get("AUTH_COOKIE_SAMESITE", "Lax"),
    }


def set_auth_cookies(response: Response, pair: TokenPairOut) -> Response:
    """Attach ``accessToken``/``refreshToken`` cookies with their lifetimes."""
    cfg = TokenConfig.from_mapping(current_app.config)
    opts = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        pair.access_token,
        max_age=int(cfg.access_expires.total_seconds()),
        **opts,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        pair.refresh_token,
        max_age=int(cfg.refresh_expires.total_seconds()),
        **opts,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    opts = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **opts)
    response.delete_cookie(REFRESH_COOKIE, **opts)
    return response


# ------------------------------- Uploads -------------------------------------


def media_file(field: str) -> MediaFile | None:
    """Return the uploaded file under ``field`` as a :class:`MediaFile`."""
    storage: FileStorage | None = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    return MediaFile(filename=storage.filename, stream=storage.stream, content_type=storage.mimetype)


# --------------------------- Service wiring ----------------------------------


def token_service() -> TokenService:
    return TokenService(
        token_provider=JWTTokenProvider(),
        token_cfg=TokenConfig.from_mapping(current_app.config),
    )


def auth_service() -> AuthService:
    return AuthService(token_service=token_service(), media_uploader=get_media_uploader())


def subscription_service() -> SubscriptionService:
    return SubscriptionService()


def profile_service() -> ProfileService:
    return ProfileService()


# -------------------------------- Timing -------------------------------------


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
