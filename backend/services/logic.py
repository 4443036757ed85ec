from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..gemini_client import GeminiError, get_gemini_client
from ..models import ClassifyAssetRequest
from ..settings import get_settings

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "GEMINI_API_KEY no configurada en las variables de entorno de Vercel."
MISSING_FIELDS_MESSAGE = "Missing required 'prompt' or 'systemInstruction' in request body."
UPSTREAM_FAILURE_PREFIX = "Fallo en la API de clasificación. "
INTERNAL_ERROR_MESSAGE = "Error interno del servidor. Consulte el log de Vercel."


def _ensure_api_key() -> None:
    if get_settings().has_api_key:
        return
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=MISSING_API_KEY_MESSAGE,
    )


async def _read_payload(request: Request) -> ClassifyAssetRequest:
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS_MESSAGE)

    try:
        return ClassifyAssetRequest.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MISSING_FIELDS_MESSAGE,
        ) from exc


async def _classify(payload: ClassifyAssetRequest) -> Any:
    client = get_gemini_client()
    try:
        return await client.classify(payload.prompt, payload.system_instruction)
    except GeminiError as exc:
        logger.error("Gemini Error: %s", exc.detail)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UPSTREAM_FAILURE_PREFIX + exc.detail,
        ) from exc


async def handle_classify_asset(request: Request) -> JSONResponse:
    """Validate the browser request, forward it to Gemini and relay the parsed answer.

    The key check runs before the body is read. Errors the caller may see are raised
    as HTTPException; anything else is logged and replaced by a generic 500.
    """
    _ensure_api_key()

    try:
        payload = await _read_payload(request)
        result = await _classify(payload)
        response = JSONResponse(status_code=status.HTTP_200_OK, content=result)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Classification proxy failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        ) from None

    if isinstance(result, dict):
        logger.info("Asset classified as %s", result.get("clasificacion"))
    return response
