"""
Local-disk storage for uploaded project documents.

Files live flat in one upload directory under a generated name
``<uuid4>-<original name>``, so two uploads never overwrite each other and the
original name is still visible on disk.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pixelforge.core.exceptions import InvalidInput, PayloadTooLarge
from pixelforge.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024

# Allowed extension -> MIME types a client may declare for it
ALLOWED_TYPES: dict[str, frozenset[str]] = {
    ".jpg": frozenset({"image/jpeg"}),
    ".jpeg": frozenset({"image/jpeg"}),
    ".png": frozenset({"image/png"}),
    ".gif": frozenset({"image/gif"}),
    ".pdf": frozenset({"application/pdf"}),
    ".doc": frozenset({"application/msword"}),
    ".docx": frozenset(
        {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
    ),
    ".txt": frozenset({"text/plain"}),
    ".zip": frozenset({"application/zip", "application/x-zip-compressed"}),
    ".rar": frozenset(
        {"application/vnd.rar", "application/x-rar-compressed", "application/octet-stream"}
    ),
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredFile:
    filename: str
    path: Path
    size: int


def sanitize_filename(original_name: str) -> str:
    # Browsers on Windows may send full paths
    name = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    raw_suffix = Path(name).suffix
    stem = name[: len(name) - len(raw_suffix)]
    # Stem and extension are cleaned apart so a non-ASCII stem keeps its extension
    suffix = _UNSAFE_CHARS.sub("_", raw_suffix[1:]).strip("._")[:20]
    stem = _UNSAFE_CHARS.sub("_", stem).strip("._")[:200] or "file"
    return f"{stem}.{suffix}" if suffix else stem


def check_file_type(original_name: str, content_type: str | None) -> str:
    """Return the normalized MIME type, or raise if the pair is not allow-listed."""
    suffix = Path(original_name or "").suffix.lower()
    mime_type = (content_type or "").split(";", 1)[0].strip().lower()
    allowed = ALLOWED_TYPES.get(suffix)
    if allowed is None or mime_type not in allowed:
        raise InvalidInput("Invalid file type")
    return mime_type


class DocumentStorage:
    def __init__(self, root: Path, max_bytes: int):
        self.root = Path(root).resolve()
        self.max_bytes = max_bytes

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, source: BinaryIO, original_name: str) -> StoredFile:
        """Copy ``source`` to disk, giving up once it passes ``max_bytes``."""
        filename = f"{uuid.uuid4()}-{sanitize_filename(original_name)}"
        path = self.root / filename
        size = 0
        try:
            with path.open("wb") as out:
                while True:
                    chunk = source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise PayloadTooLarge(
                            f"File too large. Maximum size is {self._max_size_label()}"
                        )
                    out.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        return StoredFile(filename=filename, path=path, size=size)

    def resolve(self, stored_path: str) -> Path:
        path = Path(stored_path)
        if not path.is_absolute():
            path = self.root / path
        return path

    def delete(self, stored_path: str) -> None:
        """Remove a stored file; one that is already gone is not an error."""
        path = self.resolve(stored_path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("document_file_missing", path=str(path))

    def _max_size_label(self) -> str:
        mb = self.max_bytes / (1024 * 1024)
        return f"{mb:g}MB" if mb >= 1 else f"{self.max_bytes} bytes"
