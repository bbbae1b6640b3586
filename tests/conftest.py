"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from sda.shared.completion_client import CompletionClient


def make_text_response(text: str | None):
    """Create a mock OpenAI chat completion carrying ``text``."""
    message = SimpleNamespace(content=text, tool_calls=None)
    choice = SimpleNamespace(message=message)
    return SimpleNamespace(choices=[choice], usage=None)


class StubCompletionClient:
    """Records prompts and returns fixed text (or raises ``error``)."""

    def __init__(self, text: str = "OK RESULT", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def stub_engine() -> StubCompletionClient:
    return StubCompletionClient()


@pytest.fixture
def mock_completion_client() -> CompletionClient:
    """Return a CompletionClient with a mocked OpenAI SDK underneath."""
    return CompletionClient(client=AsyncMock())


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        """\
model: "gpt-4o-mini"
port: 9000
default_language: "python"
"""
    )
    return cfg
