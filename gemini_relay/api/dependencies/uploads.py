"""
Upload staging.

A multipart upload is copied into the scratch directory under a unique name
so the encoder works from a real file, and the copy is removed when the
handler's scope ends, whatever the outcome.
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Optional
import asyncio
import logging
import tempfile

from fastapi import UploadFile

from gemini_relay.exceptions import PayloadIOError, PayloadTooLarge

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class UploadedFile:
    path: Path
    filename: str
    content_type: Optional[str]
    size: int


def _copy_to(source: BinaryIO, path: Path, max_bytes: Optional[int]) -> int:
    """Blocking chunked copy; callers run it in a worker thread."""
    size = 0
    with open(path, "wb") as out:
        while chunk := source.read(CHUNK_SIZE):
            size += len(chunk)
            if max_bytes is not None and size > max_bytes:
                raise PayloadTooLarge(f"Payload too large: exceeds limit of {max_bytes} bytes")
            out.write(chunk)
    return size


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"could not delete staged upload {path}: {e}")
        raise PayloadIOError(f"Failed to delete uploaded file: {e.strerror or e}") from e


@asynccontextmanager
async def staged_upload(
    upload: UploadFile,
    scratch_dir: Path,
    max_bytes: Optional[int] = None,
) -> AsyncIterator[UploadedFile]:
    """Stage ``upload`` on disk for the duration of the ``async with`` block."""
    filename = upload.filename or ""
    try:
        scratch_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(delete=False, dir=scratch_dir, suffix=Path(filename).suffix) as tmp:
            path = Path(tmp.name)
    except OSError as e:
        raise PayloadIOError(f"Failed to stage uploaded file: {e.strerror or e}") from e

    try:
        try:
            await upload.seek(0)
            size = await asyncio.to_thread(_copy_to, upload.file, path, max_bytes)
        except OSError as e:
            raise PayloadIOError(f"Failed to stage uploaded file: {e.strerror or e}") from e
        logger.debug(f"staged {filename!r} ({size} bytes) at {path}")
        yield UploadedFile(path=path, filename=filename, content_type=upload.content_type, size=size)
    finally:
        _discard(path)
