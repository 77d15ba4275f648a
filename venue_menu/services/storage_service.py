"""
File storage for uploaded media (venue logo).

Files are written under MEDIA_ROOT and served back through the static
mount at MEDIA_URL, so the stored URL can be saved on venue settings.
"""
from dataclasses import dataclass
import logging
import mimetypes
import os
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from fastapi import HTTPException, status

from venue_menu.core.config import settings

logger = logging.getLogger(__name__)

_IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}
_KNOWN_EXTENSIONS = set(_IMAGE_EXTENSIONS.values()) | {".jpeg"}


@dataclass(frozen=True)
class StoredObject:
    path: str
    url: str
    size: int
    content_type: str


class MediaStorage:
    def __init__(self, root: str, base_url: str, max_bytes: Optional[int] = None) -> None:
        self._root = Path(root).resolve()
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._max_bytes = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES

    def public_url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def resolve(self, path: str) -> Path:
        """Absolute location of a stored path; refuses paths outside the root."""
        target = (self._root / path).resolve()
        if self._root != target and self._root not in target.parents:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid media path",
            )
        return target

    def save(
        self,
        content: bytes,
        filename: Optional[str],
        content_type: Optional[str],
        folder: str = "logos",
    ) -> StoredObject:
        """
        Store an uploaded image under ``<folder>/<uuid><ext>``.

        Raises 422 when the payload is not an image or is empty, 413 when it
        is larger than the configured limit, and 503 when the write fails.
        """
        content_type = (content_type or "").lower()
        if not content_type.startswith("image/"):
            logger.warning("Rejected upload %s with content type %r", filename, content_type)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Logo must be an image file",
            )
        if not content:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Uploaded file is empty",
            )
        if len(content) > self._max_bytes:
            logger.warning("Rejected upload %s of %s bytes", filename, len(content))
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Logo must be at most {self._max_bytes // 1024} KB",
            )

        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in _KNOWN_EXTENSIONS:
            ext = _IMAGE_EXTENSIONS.get(content_type, "")
        relative = f"{folder}/{uuid.uuid4().hex}{ext}"
        target = self.resolve(relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.error("Failed to write upload to %s", target, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Failed to upload logo",
            ) from exc

        logger.info("Stored upload %s (%s bytes)", relative, len(content))
        return StoredObject(
            path=relative,
            url=self.public_url(relative),
            size=len(content),
            content_type=content_type,
        )

    def path_from_url(self, url: Optional[str]) -> Optional[str]:
        """Stored path behind one of our public URLs, or None for foreign URLs."""
        if not url:
            return None
        for prefix in (self._base_url, urlparse(self._base_url).path):
            if prefix and url.startswith(prefix):
                return url[len(prefix):]
        return None

    def read(self, path: str) -> tuple[bytes, str]:
        """Return the stored bytes and their content type."""
        target = self.resolve(path)
        try:
            content = target.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Media file not found",
            )
        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return content, content_type
