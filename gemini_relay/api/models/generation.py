"""
Request/response schemas for the generation endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional


class TextGenerationRequest(BaseModel):
    # "promp" is the published field name; clients depend on it.
    promp: Optional[str] = Field(None, description="Prompt text sent to the model")


class GenerationResponse(BaseModel):
    output: str = Field(..., description="Text produced by the model")
