"""CORS policy for the API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from mediahub.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Allow the configured origins to call ``/api/*`` with credentials.

    Session cookies require credentialed requests, so a wildcard origin is
    only accepted without credentials (and then cookie auth is unavailable
    cross-origin).

    Parameters
    ----------
    app: flask.Flask
        Application providing ``CORS_ORIGINS`` (comma-separated) and
        ``CORS_MAX_AGE``.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
