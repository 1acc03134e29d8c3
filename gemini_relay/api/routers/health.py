"""
Health check endpoints for monitoring and diagnostics.
"""

import time
from fastapi import APIRouter, Depends

from ..models.common import HealthStatus
from ..dependencies.services import get_config, get_model_gateway
from gemini_relay import __version__
from gemini_relay.config import RelayConfig
from gemini_relay.models.providers.base import ModelGateway

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()

@router.get("/", response_model=HealthStatus)
async def health_check(config: RelayConfig = Depends(get_config)):
    """
    Basic health check endpoint.

    Reports configuration state only; it never calls the remote model.
    """
    uptime = time.time() - _server_start_time

    dependencies = {
        "model": config.model,
        "api_key": "configured" if config.api_key else "missing",
        "upload_dir": str(config.upload_dir),
    }

    return HealthStatus(
        status="healthy",
        version=__version__,
        uptime=uptime,
        dependencies=dependencies,
    )

@router.get("/ready")
async def readiness_check(
    config: RelayConfig = Depends(get_config),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """
    Readiness probe.

    Ready only when the model endpoint answers for the configured model.
    """
    if not config.api_key:
        return {"ready": False, "reason": "GEMINI_API_KEY is not set"}

    if not await gateway.health_check():
        return {"ready": False, "reason": f"Model '{config.model}' is not reachable"}

    return {"ready": True, "message": "Service ready to handle requests"}
