"""Async OpenAI wrapper for single-shot completions.

One prompt goes out as a single user message; the first choice's text comes
back verbatim. Failures are raised as ``CompletionError`` and never retried.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import APIError, AsyncOpenAI

from sda.errors import CompletionError

logger = logging.getLogger(__name__)

MODEL = "gpt-4o"
MAX_TOKENS = 500


class CompletionClient:
    """Thin async wrapper around the OpenAI SDK.

    The SDK handle is injected so tests (and callers sharing one handle across
    requests) can substitute their own. It is treated as read-only
    configuration and never mutated.
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        *,
        api_key: str | None = None,
        model: str = MODEL,
    ) -> None:
        self._client = client if client is not None else AsyncOpenAI(api_key=api_key)
        self.model = model

    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` and return the first choice's content."""
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except APIError as exc:
            logger.error("Completion request failed: %s", exc)
            raise CompletionError(f"Completion engine request failed: {exc}") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise CompletionError("Completion engine returned no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if content is None:
            raise CompletionError("Completion engine returned a choice without content")

        usage = getattr(response, "usage", None)
        if usage:
            logger.debug(
                "Completion used %d prompt / %d completion tokens",
                getattr(usage, "prompt_tokens", 0),
                getattr(usage, "completion_tokens", 0),
            )
        return content


# ======================================================================
# Dry-run mock client — zero API calls
# ======================================================================

_DRY_RUN_TEXT: dict[str, str] = {
    "review": (
        "## Code Review\n\n"
        "- No obvious bugs found.\n"
        "- Consider adding input validation and a docstring."
    ),
    "explain": (
        "## Explanation\n\n"
        "This snippet runs from top to bottom. Each statement is executed in order."
    ),
    "optimize": (
        "## Performance\n\n"
        "The code is already linear in its input. Cache repeated lookups if it grows."
    ),
    "refactor": (
        "## Refactored Version\n\n"
        "Extract the repeated logic into a small helper function."
    ),
}


class DryRunCompletionClient:
    """Drop-in replacement for CompletionClient that makes zero API calls."""

    model = "dry-run"

    async def complete(self, prompt: str) -> str:
        key = self._detect_type(prompt)
        logger.info("[dry-run] Returning canned %s response", key)
        return _DRY_RUN_TEXT[key]

    @staticmethod
    def _detect_type(prompt: str) -> str:
        """Guess the analysis type from the instruction phrase in the prompt."""
        instruction = prompt.split("\n\n", 1)[0]
        if "code review" in instruction:
            return "review"
        if "beginner-friendly" in instruction:
            return "explain"
        if "performance optimizations" in instruction:
            return "optimize"
        return "refactor"
