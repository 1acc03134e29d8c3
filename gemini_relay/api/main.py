"""
FastAPI application entry point.

Wires the generation and health routers, loads configuration once at
startup and renders every relay error as ``{"error": message}``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models.common import ErrorResponse
from .routers import generation, health
from gemini_relay import __version__
from gemini_relay.config import RelayConfig, load_config
from gemini_relay.exceptions import RelayError
from gemini_relay.models.providers.gemini import GeminiProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the model gateway once per application."""
    config = app.state.config
    app.state.model_gateway = GeminiProvider.from_config(config)
    logger.info(f"gemini-relay ready, model={config.model}, uploads={config.upload_dir}")

    yield

    logger.info("gemini-relay shutting down")
    app.state.model_gateway = None


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # framework errors such as unparseable multipart bodies share the relay error contract
    logger.warning(f"rejected request to {request.url.path}: {exc.status_code} {exc.detail}")
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc.detail)).model_dump())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    logger.warning(f"rejected request to {request.url.path}: {details}")
    return JSONResponse(status_code=500, content=ErrorResponse(error=f"Invalid request: {details}").model_dump())


def create_app(config: Optional[RelayConfig] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Configuration is read from YAML and the environment unless passed in.
    """
    config = config or load_config()

    app = FastAPI(
        title="Gemini Relay API",
        description="Forwards text, image, document and audio payloads to Gemini",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(generation.router, tags=["generation"])
    app.include_router(health.router, prefix="/health", tags=["health"])

    @app.get("/")
    async def root():
        """Root endpoint with basic API information."""
        return {
            "name": "Gemini Relay API",
            "version": __version__,
            "status": "operational",
            "endpoints": {
                "text": "/generate-text",
                "image": "/generate-from-image",
                "document": "/generate-from-document",
                "audio": "/generate-from-audio",
                "health": "/health",
                "docs": "/docs",
            },
        }

    return app
