from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import logging
import os

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# relative paths resolve against the working directory the server starts in
DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_PAYLOAD_BYTES = 20 * 1024 * 1024  # Gemini inline request limit

DEFAULT_IMAGE_PROMPT = "Describe the image"
DEFAULT_DOCUMENT_PROMPT = "Please summarize the following document in clear bullet points:"
DEFAULT_AUDIO_PROMPT = "Transcribe or analyze the following audio:"

KNOWN_SECTIONS = {"model", "server", "uploads", "prompts", "logging"}


@dataclass(frozen=True)
class RelayConfig:
    """Process-wide settings, fixed at startup."""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout_s: Optional[float] = None
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: Tuple[str, ...] = ()
    upload_dir: Path = Path("uploads")
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    image_prompt: str = DEFAULT_IMAGE_PROMPT
    document_prompt: str = DEFAULT_DOCUMENT_PROMPT
    audio_prompt: str = DEFAULT_AUDIO_PROMPT
    log_level: str = "INFO"


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    unknown = set(raw) - KNOWN_SECTIONS
    if unknown:
        raise ValueError(f"Config has unknown sections: {', '.join(sorted(unknown))}")
    for section, body in raw.items():
        if body is not None and not isinstance(body, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
    return raw


def load_config(config_path: Union[Path, str, None] = None) -> RelayConfig:
    """
    Build the relay configuration from YAML and the environment.

    An explicit path (argument or ``RELAY_CONFIG``) must exist. The default
    ``config/config.yaml`` under the working directory is optional; without it
    only built-in defaults and the environment apply. ``GEMINI_API_KEY`` is read but not validated here.
    """
    load_dotenv()

    explicit = config_path or os.getenv("RELAY_CONFIG")
    path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH
    if path.exists():
        raw = _read_yaml(path)
    elif explicit:
        raise FileNotFoundError(f"Config not found: {path}")
    else:
        logger.info(f"no config file at {path}, using defaults")
        raw = {}

    model_cfg = raw.get("model") or {}
    server_cfg = raw.get("server") or {}
    uploads_cfg = raw.get("uploads") or {}
    prompts_cfg = raw.get("prompts") or {}
    logging_cfg = raw.get("logging") or {}

    max_payload = int(uploads_cfg.get("max_payload_bytes", DEFAULT_MAX_PAYLOAD_BYTES))
    if max_payload <= 0:
        raise ValueError("uploads.max_payload_bytes must be positive")

    timeout = model_cfg.get("request_timeout_s")

    upload_dir = Path(uploads_cfg.get("dir", "uploads"))
    if not upload_dir.is_absolute():
        upload_dir = Path.cwd() / upload_dir

    return RelayConfig(
        api_key=os.getenv("GEMINI_API_KEY") or None,
        model=os.getenv("GEMINI_MODEL") or model_cfg.get("name", DEFAULT_MODEL),
        request_timeout_s=float(timeout) if timeout is not None else None,
        host=server_cfg.get("host", "0.0.0.0"),
        port=int(server_cfg.get("port", 3000)),
        cors_origins=tuple(server_cfg.get("cors_origins") or ()),
        upload_dir=upload_dir,
        max_payload_bytes=max_payload,
        image_prompt=prompts_cfg.get("image", DEFAULT_IMAGE_PROMPT),
        document_prompt=prompts_cfg.get("document", DEFAULT_DOCUMENT_PROMPT),
        audio_prompt=prompts_cfg.get("audio", DEFAULT_AUDIO_PROMPT),
        log_level=(os.getenv("LOG_LEVEL") or logging_cfg.get("level", "INFO")).upper(),
    )
