"""
Generation endpoints.

Each route builds an ordered list of content parts, hands it to the model
gateway and relays the text. Binary routes stage the upload on disk for the
duration of the request only.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..dependencies.services import get_config, get_model_gateway
from ..dependencies.uploads import UploadedFile, staged_upload
from ..models.common import ErrorResponse
from ..models.generation import GenerationResponse, TextGenerationRequest
from gemini_relay.config import RelayConfig
from gemini_relay.exceptions import MissingFile, MissingPrompt, RelayError
from gemini_relay.models.providers.base import ModelGateway, TextPart
from gemini_relay.utils.mime import resolve_declared_mime, resolve_image_mime
from gemini_relay.utils.payload import encode_payload

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


async def _relay(mode: str, call: Awaitable[str]) -> GenerationResponse:
    try:
        output = await call
    except RelayError as e:
        logger.warning(f"{mode} generation failed: {e.message}")
        raise
    except Exception as e:
        logger.exception(f"{mode} generation failed unexpectedly")
        raise RelayError(str(e) or type(e).__name__) from e
    return GenerationResponse(output=output)


async def _generate_from_upload(
    upload: Optional[UploadFile],
    field: str,
    instruction: str,
    resolve_mime: Callable[[UploadedFile], str],
    config: RelayConfig,
    gateway: ModelGateway,
) -> str:
    if upload is None:
        raise MissingFile(f"Missing required upload field: {field}")

    async with staged_upload(upload, config.upload_dir, config.max_payload_bytes) as staged:
        mime_type = resolve_mime(staged)
        logger.info(f"{field}: {staged.filename!r} as {mime_type}, {staged.size} bytes")
        payload = await asyncio.to_thread(encode_payload, staged.path, mime_type, config.max_payload_bytes)
        return await gateway.generate([TextPart(instruction), payload])


@router.post("/generate-text", response_model=GenerationResponse, responses=ERROR_RESPONSES)
async def generate_text(
    request: TextGenerationRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
):
    async def call() -> str:
        if not request.promp:
            raise MissingPrompt("Missing required field: promp")
        return await gateway.generate([TextPart(request.promp)])

    return await _relay("text", call())


@router.post("/generate-from-image", response_model=GenerationResponse, responses=ERROR_RESPONSES)
async def generate_from_image(
    image: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    config: RelayConfig = Depends(get_config),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    # mime comes from the client's original filename, not the staged copy
    return await _relay("image", _generate_from_upload(
        image, "image", prompt or config.image_prompt,
        lambda staged: resolve_image_mime(staged.filename),
        config, gateway,
    ))


@router.post("/generate-from-document", response_model=GenerationResponse, responses=ERROR_RESPONSES)
async def generate_from_document(
    document: Optional[UploadFile] = File(None),
    config: RelayConfig = Depends(get_config),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    return await _relay("document", _generate_from_upload(
        document, "document", config.document_prompt,
        lambda staged: resolve_declared_mime(staged.content_type, "document"),
        config, gateway,
    ))


@router.post("/generate-from-audio", response_model=GenerationResponse, responses=ERROR_RESPONSES)
async def generate_from_audio(
    audio: Optional[UploadFile] = File(None),
    config: RelayConfig = Depends(get_config),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    return await _relay("audio", _generate_from_upload(
        audio, "audio", config.audio_prompt,
        lambda staged: resolve_declared_mime(staged.content_type, "audio"),
        config, gateway,
    ))
