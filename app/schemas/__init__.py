"""Pydantic schemas package."""

from app.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ChatTurn,
    ErrorResponse,
    LogEntry,
)

__all__ = [
    "ChatRequest", "ChatResponse", "ChatTurn",
    "ErrorResponse", "LogEntry",
]
