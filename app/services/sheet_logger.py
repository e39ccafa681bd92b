"""Best-effort logging of chat exchanges to the Google Apps Script web app."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.schemas.chat import LogEntry

logger = logging.getLogger(__name__)


async def send_log_entry(
    url: str,
    entry: LogEntry,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """
    POST one exchange to ``url``.

    Runs after the response has been sent. Failures are logged and dropped;
    they never reach the caller and are not retried.
    """
    try:
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
            response = await client.post(url, json=entry.model_dump())
            response.raise_for_status()
    except Exception as exc:
        logger.error("Failed to send data to GAS: %s", exc)
        return
    logger.debug("Logged exchange to GAS (status=%s)", response.status_code)
