"""
Chat relay endpoint, called by the static frontend.

Forwards the message, the prior turns and the persona's system prompt to
Gemini and returns ``{"text": ...}``. Every response carries permissive CORS
headers, so the route accepts all methods and answers non-POST verbs itself.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.config import Settings, get_settings
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse, LogEntry
from app.services.gemini import GeminiClient, extract_text, get_gemini_client
from app.services.sheet_logger import send_log_entry
from app.utils.prompts import build_contents

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_ALL_METHODS = [
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT",
]


def _error(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    return JSONResponse(
        content=ErrorResponse(error=message).model_dump(),
        status_code=status_code,
        headers=CORS_HEADERS,
    )


@router.api_route("/api/chat", methods=_ALL_METHODS)
async def chat(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    gemini: GeminiClient = Depends(get_gemini_client),
) -> Response:
    """
    Relay one chat turn to Gemini.

    OPTIONS  -> 200, empty body (preflight)
    POST     -> 200 {"text": ...} or 500 {"error": ...}
    other    -> 405 "Method not allowed"
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

    if request.method != "POST":
        return PlainTextResponse(
            "Method not allowed",
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers=CORS_HEADERS,
        )

    try:
        body = ChatRequest.model_validate(await request.json())

        api_key = settings.resolve_api_key(body.persona)
        if not api_key:
            logger.error("No API key configured for persona %r", body.persona)
            return _error(f"API key not configured for persona: {body.persona}")

        logger.info(
            "Incoming chat: persona=%s history_turns=%d message_len=%d",
            body.persona,
            len(body.history),
            len(body.message),
        )
        contents = build_contents(body.system_prompt, body.history, body.message)
        data = await gemini.generate(api_key, contents)
        text = extract_text(data)

        if settings.gas_webapp_url:
            background_tasks.add_task(
                send_log_entry,
                settings.gas_webapp_url,
                LogEntry.now(query=body.message, response=text),
            )

        return JSONResponse(content=ChatResponse(text=text).model_dump(), headers=CORS_HEADERS)
    except Exception as exc:
        logger.exception("Chat relay failed: %s", exc)
        return _error(str(exc))
