from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..models import ClassificationResult, ErrorResponse
from ..services.logic import handle_classify_asset

router = APIRouter(tags=["classify"])


@router.post(
    "/classify-asset",
    responses={
        200: {"model": ClassificationResult},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def classify_asset_endpoint(request: Request) -> JSONResponse:
    return await handle_classify_asset(request)
