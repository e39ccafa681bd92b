"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from app.routers import chat as chat_router
from app.schemas.chat import LogEntry
from app.services.gemini import get_gemini_client

_ENV_VARS = (
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY_NISHIGAWAS",
    "PERSONA_API_KEYS",
    "GEMINI_MODEL",
    "GEMINI_API_BASE",
    "GEMINI_TEMPERATURE",
    "GEMINI_MAX_OUTPUT_TOKENS",
    "GEMINI_TIMEOUT_SECONDS",
    "GAS_WEBAPP_URL",
)


def gemini_reply(text: str) -> dict[str, Any]:
    """Minimal generateContent response carrying one candidate."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


# --- Protocol-conforming Fakes ---


class FakeGeminiClient:
    """Fake GeminiClient recording every generate() call."""

    def __init__(self, response: Optional[dict[str, Any]] = None):
        self._response = response if response is not None else gemini_reply("Fake reply")
        self._error: Optional[Exception] = None
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []

    async def generate(self, api_key: str, contents: list[dict[str, Any]]) -> dict[str, Any]:
        self.calls.append((api_key, contents))
        if self._error is not None:
            raise self._error
        return self._response

    def set_response(self, response: dict[str, Any]) -> None:
        self._response = response

    def set_error(self, error: Exception) -> None:
        self._error = error


# --- Fixtures ---


@pytest.fixture
def make_settings(monkeypatch):
    """Settings factory isolated from the host environment and .env."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    def _make(**overrides: Any) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def relay(make_settings, monkeypatch):
    """TestClient with settings, Gemini and the sheet logger replaced."""
    state = SimpleNamespace(
        settings=make_settings(
            google_api_key="default-key",
            gemini_api_key_nishigawas="nishigawas-key",
        ),
        gemini=FakeGeminiClient(),
        sent=[],
    )

    async def fake_send_log_entry(url: str, entry: LogEntry) -> None:
        state.sent.append((url, entry))

    monkeypatch.setattr(chat_router, "send_log_entry", fake_send_log_entry)
    app.dependency_overrides[get_settings] = lambda: state.settings
    app.dependency_overrides[get_gemini_client] = lambda: state.gemini

    with TestClient(app) as client:
        state.client = client
        yield state

    app.dependency_overrides.clear()
