"""
Gemini service, a thin client for the generateContent REST endpoint.

The key travels as the ``key`` query parameter so each request can use the
key of its own persona. There is no retry and no fallback model: a non-2xx
status raises GeminiError and the upstream body only reaches the log.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.utils.prompts import FALLBACK_REPLY

logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Raised when generateContent answers with a non-success status."""


class GeminiClient:
    """Issue generateContent calls with the configured model and generation config."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = f"{settings.gemini_api_base}/models/{settings.gemini_model}:generateContent"
        self._generation_config = {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_output_tokens,
        }
        self._timeout = settings.gemini_timeout_seconds
        self._transport = transport

    async def generate(self, api_key: str, contents: list[dict[str, Any]]) -> dict[str, Any]:
        """POST the conversation and return the decoded JSON response."""
        body = {"contents": contents, "generationConfig": self._generation_config}
        logger.debug("Gemini request: %d content turns", len(contents))

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self._url, params={"key": api_key}, json=body)

        if not response.is_success:
            logger.error("Gemini API error: %s", response.text)
            raise GeminiError(f"Gemini API error: {response.status_code}")
        return response.json()


def extract_text(data: Any) -> str:
    """Return the first candidate's first text part, or FALLBACK_REPLY."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not text:
        logger.warning("Gemini returned no candidate text; using fallback reply.")
        return FALLBACK_REPLY
    return text


def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    """FastAPI dependency: a client bound to the current settings."""
    return GeminiClient(settings)
