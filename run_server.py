#!/usr/bin/env python3
"""
Development server launcher for the Gemini Relay API.

Reads config/config.yaml (or RELAY_CONFIG) and the environment, then starts
uvicorn on the configured host and port.
"""

import logging

import uvicorn

from gemini_relay.api.main import create_app
from gemini_relay.config import load_config

if __name__ == "__main__":
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger(__name__).info(f"Starting Gemini Relay API at http://localhost:{config.port}")
    logging.getLogger(__name__).info(f"API documentation at: http://localhost:{config.port}/docs")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
