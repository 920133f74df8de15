from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol


@dataclass(frozen=True, slots=True)
class MediaFile:
    """An uploaded file, detached from the web framework's request object."""

    filename: str
    stream: BinaryIO
    content_type: str | None = None


class MediaUploader(Protocol):
    """Port for the external media storage service."""

    def upload(self, media: MediaFile) -> str | None:
        """Store ``media`` and return its public URL.

        Returns ``None`` when the service accepted the request but produced no
        URL (rejected file). Transport or server failures raise
        :class:`~mediahub.services._shared.errors.MediaUploadError`.
        """
        ...
