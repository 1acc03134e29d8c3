"""
Accessors for the objects built once per application.

``create_app`` and its lifespan handler put them on ``app.state``; tests
swap these out through ``app.dependency_overrides``.
"""

from fastapi import Request

from gemini_relay.config import RelayConfig
from gemini_relay.models.providers.base import ModelGateway


def get_config(request: Request) -> RelayConfig:
    """FastAPI dependency to get the application's configuration."""
    return request.app.state.config


def get_model_gateway(request: Request) -> ModelGateway:
    """FastAPI dependency to get the application's model gateway."""
    return request.app.state.model_gateway
