from __future__ import annotations
from pathlib import PurePath
from typing import Dict, FrozenSet, Optional

from ..exceptions import UnsupportedFormat

IMAGE_MIME_TYPES: Dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}

# Declared content types Gemini accepts as inline data.
DECLARED_MIME_TYPES: Dict[str, FrozenSet[str]] = {
    "document": frozenset({
        "application/pdf",
        "text/plain",
        "text/html",
        "text/css",
        "text/csv",
        "text/markdown",
        "text/xml",
        "text/rtf",
        "application/x-javascript",
        "text/javascript",
        "application/x-python",
        "text/x-python",
    }),
    "audio": frozenset({
        "audio/wav",
        "audio/x-wav",
        "audio/mp3",
        "audio/mpeg",
        "audio/aiff",
        "audio/x-aiff",
        "audio/aac",
        "audio/ogg",
        "audio/flac",
        "audio/x-flac",
    }),
}


def resolve_image_mime(filename: str) -> str:
    ext = PurePath(filename or "").suffix.lower()
    try:
        return IMAGE_MIME_TYPES[ext]
    except KeyError:
        raise UnsupportedFormat(f"Unsupported image format: {ext}") from None


def resolve_declared_mime(content_type: Optional[str], kind: str) -> str:
    """
    Validate a client-declared content type against the allow-list for ``kind``.

    Parameters such as ``; charset=utf-8`` are dropped and the type is
    lower-cased before the lookup.
    """
    allowed = DECLARED_MIME_TYPES[kind]
    mime_type = (content_type or "").split(";", 1)[0].strip().lower()
    if mime_type not in allowed:
        raise UnsupportedFormat(f"Unsupported {kind} format: {mime_type or 'unknown'}")
    return mime_type
