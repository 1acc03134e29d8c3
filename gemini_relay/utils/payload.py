from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import base64

from ..exceptions import PayloadIOError, PayloadTooLarge
from ..models.providers.base import InlinePart


def encode_payload(path: Union[str, Path], mime_type: str, max_bytes: Optional[int] = None) -> InlinePart:
    """Read a staged file and wrap it as a base64 inline part. Blocking."""
    path = Path(path)
    try:
        size = path.stat().st_size
        if max_bytes is not None and size > max_bytes:
            raise PayloadTooLarge(f"Payload too large: {size} bytes exceeds limit of {max_bytes} bytes")
        data = path.read_bytes()
    except OSError as e:
        raise PayloadIOError(f"Failed to read uploaded file: {e.strerror or e}") from e

    return InlinePart(mime_type=mime_type, data=base64.b64encode(data).decode("ascii"))
