"""Local-disk storage for uploaded product images.

Bytes are written under the configured upload directory with a generated,
collision-free name; the returned URL is served by the static ``/uploads``
mount. Only ``image/*`` content types up to ``max_bytes`` are accepted.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from storefront.core.errors import ValidationError
from storefront.models.constants import UPLOADS_URL_PREFIX

logger = logging.getLogger("storefront.images")

FIELD_NAME = "image"


@dataclass(frozen=True)
class StoredImage:
    filename: str
    url: str


class ImageStore:
    def __init__(self, upload_dir: Path, max_bytes: int = 5 * 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _unique_name(self, original: Optional[str]) -> str:
        suffix = Path(original or "").suffix.lower()
        return f"{FIELD_NAME}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"

    def _resolve(self, filename: str) -> Path:
        path = (self.upload_dir / filename).resolve()
        if path.parent != self.upload_dir.resolve() or not filename:
            raise ValidationError("invalid image filename")
        return path

    def save(
        self, original_name: Optional[str], content_type: Optional[str], data: bytes
    ) -> StoredImage:
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed!")
        if len(data) > self.max_bytes:
            raise ValidationError(f"image exceeds maximum size of {self.max_bytes} bytes")
        name = self._unique_name(original_name)
        self._resolve(name).write_bytes(data)
        logger.info("image stored", extra={"image_name": name, "bytes": len(data)})
        return StoredImage(filename=name, url=f"{UPLOADS_URL_PREFIX}/{name}")

    def delete(self, filename: str) -> bool:
        path = self._resolve(filename)
        if not path.is_file():
            return False
        path.unlink()
        logger.info("image deleted", extra={"image_name": filename})
        return True
