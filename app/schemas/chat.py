"""Pydantic schemas for the chat relay endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatTurn(BaseModel):
    """A single turn in the conversation history, as the frontend stores it."""

    role: str = ""
    content: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _non_string_role_is_empty(cls, value: object) -> object:
        # Any role other than "user" is sent as "model", so its exact value is irrelevant.
        return value if isinstance(value, str) else ""

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_is_empty(cls, value: object) -> object:
        return "" if value is None else value


class ChatRequest(BaseModel):
    """Body for POST /api/chat."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    system_prompt: str = Field("", alias="systemPrompt")
    history: list[ChatTurn] = Field(default_factory=list)
    persona: str = ""

    @field_validator("history", mode="before")
    @classmethod
    def _none_history_is_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("system_prompt", "persona", mode="before")
    @classmethod
    def _none_text_is_empty(cls, value: object) -> object:
        return "" if value is None else value


class ChatResponse(BaseModel):
    """Successful reply relayed to the caller."""

    text: str


class ErrorResponse(BaseModel):
    """Failure body; the only other shape /api/chat returns."""

    error: str


class LogEntry(BaseModel):
    """One exchange, posted to the logging web app."""

    query: str
    response: str
    timestamp: str

    @classmethod
    def now(cls, query: str, response: str) -> LogEntry:
        """Build an entry stamped with the current UTC time."""
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return cls(query=query, response=response, timestamp=stamp.replace("+00:00", "Z"))
