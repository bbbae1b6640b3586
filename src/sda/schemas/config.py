"""Configuration schema — validates assistant-config.yml."""

from pydantic import BaseModel, model_validator

from sda.schemas.analysis import DEFAULT_LANGUAGE


class AssistantConfig(BaseModel):
    """Top-level configuration loaded from assistant-config.yml.

    Every field has a default, so an empty file (or no file) is valid.
    """

    # Completion engine
    model: str = "gpt-4o"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Client
    server_url: str = "http://127.0.0.1:8000"
    default_language: str = DEFAULT_LANGUAGE

    @model_validator(mode="after")
    def check_model(self) -> "AssistantConfig":
        if not self.model.strip():
            raise ValueError("model must not be empty")
        return self

    @model_validator(mode="after")
    def check_port(self) -> "AssistantConfig":
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        return self
