from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ClassificationLevel(str, Enum):
    PUBLICA = "PÚBLICA"
    INTERNA = "INTERNA"
    CONFIDENCIAL = "CONFIDENCIAL"
    RESTRINGIDA = "RESTRINGIDA"


class ClassifyAssetRequest(BaseModel):
    """Body sent by the browser client; both fields are forwarded verbatim."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: StrictStr = Field(..., min_length=1)
    system_instruction: StrictStr = Field(..., min_length=1, alias="systemInstruction")


class ClassificationResult(BaseModel):
    clasificacion: ClassificationLevel
    justificacion: str


class ErrorResponse(BaseModel):
    error: str
