"""HTTP transport from the client session to ``POST /analyze``."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from sda.errors import TransportError
from sda.schemas.analysis import AnalysisRequest

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Sends one request and returns the raw result text."""

    async def send(self, request: AnalysisRequest) -> str: ...


class HttpTransport:
    """Posts requests with an ``httpx.AsyncClient``.

    No timeout is imposed here; pass a configured ``http`` client to add one.
    """

    def __init__(self, base_url: str = "", *, http: httpx.AsyncClient | None = None) -> None:
        # Only a client created here is closed by aclose().
        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient(base_url=base_url, timeout=None)

    async def send(self, request: AnalysisRequest) -> str:
        try:
            resp = await self._http.post("/analyze", json=request.to_payload())
        except httpx.HTTPError as exc:
            logger.warning("Analyze request failed: %s", exc)
            raise TransportError(f"Could not reach the server ({type(exc).__name__})") from exc

        if resp.is_success:
            return resp.text

        logger.warning("Analyze request returned HTTP %d", resp.status_code)
        raise TransportError(_error_message(resp.text))

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()


def _error_message(body: str) -> str:
    """Server error bodies read ``Error: <reason>``; keep only the reason."""
    message = body.strip()
    if message.startswith("Error:"):
        message = message[len("Error:"):].strip()
    return message or "Server error"
