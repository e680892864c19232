from __future__ import annotations

import base64
import binascii
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Protocol

from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_MAX_UPLOAD_BYTES
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf", "png", "jpg", "jpeg", "webp", "gif"}
DEFAULT_UPLOAD_STEM = "ticket_copy"


@dataclass(frozen=True)
class StoredFile:
    url: str
    file_name: str

    def to_api(self) -> dict:
        return {"url": self.url, "fileName": self.file_name}


class FileStorage(Protocol):
    def store_base64(self, *, file_name: str, data: str) -> StoredFile:
        raise NotImplementedError


def decode_base64_payload(data: str) -> bytes:
    """Accept raw base64 or a data URL ('data:application/pdf;base64,....')."""

    if not isinstance(data, str) or not data.strip():
        raise ValidationError("File data is required")
    if data.startswith("data:"):
        data = data.split(",", 1)[1] if "," in data else ""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("File data is not valid base64")


class LocalFileStorage(FileStorage):
    """Writes ticket copies under one directory and hands back a public URL."""

    def __init__(self, root: str | Path, *, url_prefix: str = "/uploads", max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES):
        self._root = Path(root)
        self._url_prefix = url_prefix.rstrip("/")
        self._max_bytes = int(max_bytes)

    @property
    def root(self) -> Path:
        return self._root

    def store_base64(self, *, file_name: str, data: str) -> StoredFile:
        if not isinstance(file_name, str):
            raise ValidationError("fileName must be text")
        # extension from the raw name: secure_filename drops non-ASCII stems along with their dot
        ext = PurePath(file_name).suffix.lower().lstrip(".")
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(f"File type not allowed (allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))})")
        clean_name = secure_filename(file_name)
        if not clean_name.lower().endswith(f".{ext}"):
            clean_name = f"{DEFAULT_UPLOAD_STEM}.{ext}"

        content = decode_base64_payload(data)
        if not content:
            raise ValidationError("File is empty")
        if len(content) > self._max_bytes:
            raise ValidationError(f"File exceeds {self._max_bytes} bytes")

        stored_name = f"{uuid.uuid4().hex}_{clean_name}"
        self._root.mkdir(parents=True, exist_ok=True)
        (self._root / stored_name).write_bytes(content)
        logger.info("Stored upload %s (%d bytes)", stored_name, len(content))

        return StoredFile(url=f"{self._url_prefix}/{stored_name}", file_name=clean_name)
