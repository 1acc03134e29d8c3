from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Union
import base64

from ...exceptions import RelayError

#unified model error, remote causes are not distinguished
class ModelError(RelayError): ...

@dataclass(frozen=True)
class TextPart:
    text: str

@dataclass(frozen=True)
class InlinePart:
    mime_type: str
    data: str #base64 encoded payload

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

ContentPart = Union[TextPart, InlinePart]

class ModelGateway(ABC):
    @abstractmethod
    async def generate(self, parts: Sequence[ContentPart]) -> str:
        raise NotImplementedError

    @abstractmethod
    async def health_check(self) -> bool:
        raise NotImplementedError
