"""Request handler — validates one analysis request and runs it."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from sda.errors import InvalidRequest
from sda.prompts import build_prompt, parse_analysis_type
from sda.schemas.analysis import AnalysisRequest

logger = logging.getLogger(__name__)


class SupportsComplete(Protocol):
    """Anything with an async ``complete(prompt) -> str`` (real or dry-run)."""

    async def complete(self, prompt: str) -> str: ...


class RequestHandler:
    """Sequences validation, prompt building and the completion call.

    Holds no per-request state; the completion client is shared read-only.
    """

    def __init__(self, completion_client: SupportsComplete) -> None:
        self.completion_client = completion_client

    def parse(self, payload: Any) -> AnalysisRequest:
        """Validate a decoded JSON body into an ``AnalysisRequest``.

        The analysis type is checked first so an unknown type is reported
        as such even when other fields are also wrong.
        """
        if not isinstance(payload, dict):
            raise InvalidRequest("Request body must be a JSON object")

        parse_analysis_type(payload.get("type"))

        try:
            return AnalysisRequest.model_validate(payload)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) or "body" for err in exc.errors()
            )
            raise InvalidRequest(f"Malformed request body (invalid fields: {fields})") from exc

    async def handle(self, payload: Any) -> str:
        """Validate ``payload``, build the prompt and return the completion text."""
        request = self.parse(payload)
        logger.info(
            "Analyzing: type=%s language=%s len=%d",
            request.analysis_type.value,
            request.language,
            len(request.code),
        )

        prompt = build_prompt(request.analysis_type, request.language, request.code)
        text = await self.completion_client.complete(prompt)

        logger.info("Analysis done: type=%s chars=%d", request.analysis_type.value, len(text))
        return text
