"""HTTP client for the external media storage service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from mediahub.services._shared.errors import MediaUploadError
from mediahub.services._shared.ports import MediaFile, MediaUploader

log = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpMediaUploader(MediaUploader):
    """
    Upload files with a multipart ``POST`` and read the URL from the JSON reply.

    Parameters
    ----------
    url : str
        Upload endpoint.
    token : str | None
        Bearer token sent in ``Authorization`` when set.
    timeout : int
        Seconds before the request is abandoned.

    Notes
    -----
    - ``2xx`` with ``secure_url`` (or ``url``) → that URL.
    - ``4xx``, a non-JSON body or a body without a URL → ``None``.
    - Connection errors, timeouts and ``5xx`` → :class:`MediaUploadError`.
    - No retries.
    """

    url: str
    token: str | None = None
    timeout: int = 30
    session: requests.Session = field(default_factory=requests.Session)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def upload(self, media: MediaFile) -> str | None:
        files = {"file": (media.filename, media.stream, media.content_type)}
        try:
            resp = self.session.post(
                self.url, files=files, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as exc:
            log.error("Media upload failed: %s", exc.__class__.__name__)
            raise MediaUploadError("Media upload service unavailable") from exc

        if resp.status_code >= 500:
            log.error("Media upload rejected by server: status=%s", resp.status_code)
            raise MediaUploadError("Media upload service error")
        if resp.status_code >= 400:
            log.warning("Media upload refused: status=%s file=%s", resp.status_code, media.filename)
            return None

        try:
            body: Any = resp.json()
        except ValueError:
            log.warning("Media upload returned a non-JSON body")
            return None
        if not isinstance(body, dict):
            return None
        url = body.get("secure_url") or body.get("url")
        return str(url) if url else None
