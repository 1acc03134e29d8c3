"""
Common API models shared by every endpoint.
"""

from pydantic import BaseModel, Field
from typing import Dict


class ErrorResponse(BaseModel):
    """Body of every failed request."""
    error: str = Field(..., description="Error message")


class HealthStatus(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    uptime: float = Field(..., description="Uptime in seconds")
    dependencies: Dict[str, str] = Field(..., description="Status of external dependencies")
