from .base import ContentPart, InlinePart, ModelError, ModelGateway, TextPart
from .gemini import GeminiProvider

__all__ = ["ContentPart", "InlinePart", "ModelError", "ModelGateway", "TextPart", "GeminiProvider"]
