import logging
import time
from pathlib import Path
from typing import Optional

from vitrine.config import get_settings
from vitrine.core.constants import BLOB_NAMESPACE, PROJECT_ROOT
from vitrine.core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def _sanitize_filename(value):
    if not value:
        return ""
    text = str(value).replace("\\", "/").rsplit("/", 1)[-1].strip()
    if not text:
        return ""
    sanitized = []
    for char in text:
        if char.isalnum() or char in ("-", "_", "."):
            sanitized.append(char)
        else:
            sanitized.append("_")
    return "".join(sanitized).strip("_.")


class BlobStorage:
    """Stores uploaded product images on disk and hands back a public URL."""

    def __init__(
        self,
        root_dir,
        base_url: str,
        *,
        namespace: str = BLOB_NAMESPACE,
        max_bytes: Optional[int] = None,
        clock=time.time,
    ):
        self.root_dir = Path(root_dir)
        self.base_url = base_url.rstrip("/")
        self.namespace = namespace
        self.max_bytes = max_bytes
        self._clock = clock

    def object_key(self, filename: str) -> str:
        safe_name = _sanitize_filename(filename)
        if not safe_name:
            raise ValidationError("image file name is required")
        return "{}/{}_{}".format(self.namespace, int(self._clock() * 1000), safe_name)

    def url_for(self, key: str) -> str:
        return "{}/{}".format(self.base_url, key)

    def upload(self, filename: str, data: bytes) -> str:
        if not data:
            raise ValidationError("image file is empty")
        if self.max_bytes is not None and len(data) > self.max_bytes:
            raise ValidationError("image file exceeds {} bytes".format(self.max_bytes))

        key = self.object_key(filename)
        target = self.root_dir / key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.error("Unable to store upload %s: %s", key, exc)
            raise StoreError("upload failed") from exc

        logger.info("Stored product image %s (%d bytes)", key, len(data))
        return self.url_for(key)


def media_root() -> Path:
    media_dir = Path(get_settings().MEDIA_DIR)
    if not media_dir.is_absolute():
        media_dir = PROJECT_ROOT / media_dir
    return media_dir


def get_blob_storage() -> BlobStorage:
    settings = get_settings()
    return BlobStorage(
        media_root(),
        settings.MEDIA_BASE_URL,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )


__all__ = ["BlobStorage", "get_blob_storage", "media_root"]
