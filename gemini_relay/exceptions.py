"""Relay error taxonomy. Every error here is rendered as ``{"error": message}``."""

from typing import Optional


class RelayError(Exception):
    """Base error for anything a request handler can fail with."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnsupportedFormat(RelayError):
    """Payload type is not one the model accepts."""


class PayloadIOError(RelayError):
    """Staged upload could not be written, read or deleted."""


class PayloadTooLarge(RelayError):
    """Payload exceeds the configured inline size cap."""


class MissingFile(RelayError):
    """Required multipart upload field was not sent."""


class MissingPrompt(RelayError):
    """Text generation request carried no prompt."""
