from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .models import ClassificationLevel
from .settings import get_settings

logger = logging.getLogger(__name__)

UNKNOWN_UPSTREAM_ERROR = "Error desconocido al contactar a Gemini."

CLASSIFICATION_FIELD = "clasificacion"
JUSTIFICATION_FIELD = "justificacion"


class GeminiError(RuntimeError):
    """Gemini answered, but not with a usable classification."""

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail or UNKNOWN_UPSTREAM_ERROR
        super().__init__(self.detail)


def build_payload(prompt: str, system_instruction: str) -> Dict[str, Any]:
    """Build the generateContent body asking for a structured classification."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": {
                "type": "OBJECT",
                "properties": {
                    CLASSIFICATION_FIELD: {
                        "type": "STRING",
                        "enum": [level.value for level in ClassificationLevel],
                    },
                    JUSTIFICATION_FIELD: {"type": "STRING"},
                },
                "propertyOrdering": [CLASSIFICATION_FIELD, JUSTIFICATION_FIELD],
            },
        },
    }


def _error_detail(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def extract_candidate_text(data: Dict[str, Any]) -> str:
    """Return the text of the first part of the first candidate."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise GeminiError() from exc
    if not isinstance(text, str):
        raise GeminiError()
    return text


class GeminiClient:
    """Thin async wrapper around the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.gemini_api_key
        self._api_url = api_url or settings.gemini_api_url
        self._timeout = timeout if timeout is not None else settings.gemini_timeout
        self._transport = transport

    async def generate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST the payload and return the decoded response body.

        Raises:
            GeminiError: if Gemini reports a failure or the body carries no candidates.
            httpx.HTTPError: on transport failures.
        """
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                self._api_url,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success or not isinstance(data, dict) or not data.get("candidates"):
            logger.debug("Gemini responded with status %s", response.status_code)
            raise GeminiError(_error_detail(data))
        return data

    async def classify(self, prompt: str, system_instruction: str) -> Any:
        """Ask Gemini for a classification and return the parsed JSON it produced."""
        data = await self.generate(build_payload(prompt, system_instruction))
        return json.loads(extract_candidate_text(data))


def get_gemini_client() -> GeminiClient:
    """Return a client bound to the current settings."""
    return GeminiClient()
