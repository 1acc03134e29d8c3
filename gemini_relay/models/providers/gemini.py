from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import time

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .base import ContentPart, InlinePart, ModelError, ModelGateway, TextPart
from ...config import RelayConfig

logger = logging.getLogger(__name__)


class GeminiProvider(ModelGateway):
    def __init__(self, api_key: Optional[str], model: str, request_timeout_s: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.request_timeout_s = request_timeout_s
        self._client = None #created on first call, a missing key only fails then

    @classmethod
    def from_config(cls, config: RelayConfig) -> "GeminiProvider":
        return cls(api_key=config.api_key, model=config.model, request_timeout_s=config.request_timeout_s)

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise ModelError("GEMINI_API_KEY is not set")
            http_options = None
            if self.request_timeout_s:
                # sdk timeout is in milliseconds
                http_options = types.HttpOptions(timeout=int(self.request_timeout_s * 1000))
            self._client = genai.Client(api_key=self.api_key, http_options=http_options)
        return self._client

    def _format_parts(self, parts: Sequence[ContentPart]) -> List[types.Part]:
        formatted = []
        for part in parts:
            if isinstance(part, TextPart):
                formatted.append(types.Part.from_text(text=part.text))
            elif isinstance(part, InlinePart):
                formatted.append(types.Part.from_bytes(data=part.to_bytes(), mime_type=part.mime_type))
            else:
                raise ModelError(f"Unsupported content part: {type(part).__name__}")
        return formatted

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        if not parts:
            raise ModelError("At least one content part is required")

        contents = self._format_parts(parts)
        client = self.client

        t0 = time.perf_counter()
        try:
            response = await client.aio.models.generate_content(model=self.model, contents=contents)
        except genai_errors.APIError as e:
            raise ModelError(e.message or str(e)) from e
        except Exception as e:
            raise ModelError(str(e) or f"Gemini request failed: {type(e).__name__}") from e
        dt = time.perf_counter() - t0

        text = response.text
        if text is None:
            raise ModelError("Gemini returned no text in its response")

        usage = response.usage_metadata
        logger.info(
            f"gemini {self.model}: {len(parts)} parts in {dt:.2f}s"
            + (f", {usage.total_token_count} tokens" if usage and usage.total_token_count else "")
        )
        return text

    async def health_check(self) -> bool:
        try:
            await self.client.aio.models.get(model=self.model)
            return True
        except Exception as e:
            logger.warning(f"gemini health check failed: {e}")
            return False
