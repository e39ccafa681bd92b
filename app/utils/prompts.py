"""
Conversation payload builder for the Gemini generateContent call.
All fixed prompt strings live here, no hardcoded prompts elsewhere in the codebase.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from app.schemas.chat import ChatTurn

# Model turn that answers the system prompt before the real history starts.
PRIMING_ACKNOWLEDGMENT = (
    "承知いたしました。私はミュージカル一家「西側家」として、ルールに従って応答します。"
)

# Substituted when the model returns no candidate text ("the curtain closed, try again").
FALLBACK_REPLY = "（幕が閉じてしまいました...もう一度お試しください）"

USER_ROLE = "user"
MODEL_ROLE = "model"

# Lossy tag removal, not an HTML sanitiser.
_MARKUP_RE = re.compile(r"<[^>]*>?", re.MULTILINE)


def strip_markup(text: str) -> str:
    """Remove anything that looks like a markup tag from ``text``."""
    return _MARKUP_RE.sub("", text)


def normalize_role(role: str) -> str:
    """Map a frontend role onto the two roles Gemini accepts."""
    return USER_ROLE if role == USER_ROLE else MODEL_ROLE


def _turn(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_contents(
    system_prompt: str,
    history: Iterable[ChatTurn],
    message: str,
) -> list[dict[str, Any]]:
    """
    Build the ``contents`` list for generateContent.

    Order is fixed: system prompt as a user turn, the priming acknowledgment
    as a model turn, the history with markup stripped, then the current
    message exactly as received.
    """
    contents = [
        _turn(USER_ROLE, system_prompt),
        _turn(MODEL_ROLE, PRIMING_ACKNOWLEDGMENT),
    ]
    for turn in history:
        contents.append(_turn(normalize_role(turn.role), strip_markup(turn.content)))
    contents.append(_turn(USER_ROLE, message))
    return contents
