"""External media storage adapter and its Flask wiring."""

from __future__ import annotations

from flask import Flask, current_app

from mediahub.services._shared.ports import MediaUploader

from .http_uploader import HttpMediaUploader

EXTENSION_KEY = "media_uploader"


def init_app(app: Flask) -> None:
    """Register an :class:`HttpMediaUploader` built from app config.

    An uploader already present under ``app.extensions`` is kept, so callers
    can install a different adapter before the factory runs this hook.
    """
    app.extensions.setdefault(
        EXTENSION_KEY,
        HttpMediaUploader(
            url=app.config["MEDIA_UPLOAD_URL"],
            token=app.config.get("MEDIA_UPLOAD_TOKEN"),
            timeout=int(app.config.get("MEDIA_UPLOAD_TIMEOUT", 30)),
        ),
    )


def get_media_uploader() -> MediaUploader:
    """Return the uploader registered on the current app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "HttpMediaUploader", "get_media_uploader", "init_app"]
