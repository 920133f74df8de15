"""
mediahub.services._shared.ports
===============================

Ports (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, signing and verification of access/refresh JWTs.

- :mod:`media_uploader`:
    :class:`~.MediaUploader` and :class:`~.MediaFile`, the external media
    storage collaborator that turns an uploaded file into a public URL.

Concrete adapters live under ``mediahub.infra``.
"""

from __future__ import annotations

from .media_uploader import MediaFile, MediaUploader
from .token_provider import TokenProvider

__all__ = [
    "MediaFile",
    "MediaUploader",
    "TokenProvider",
]
