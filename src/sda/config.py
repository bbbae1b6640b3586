"""YAML config loader — reads assistant-config.yml into AssistantConfig."""

from pathlib import Path

import yaml

from sda.schemas.config import AssistantConfig


def load_config(path: str | Path | None = None) -> AssistantConfig:
    """Load and validate an assistant config file.

    ``None`` returns the defaults. Raises ``FileNotFoundError`` if the path
    doesn't exist and ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    if path is None:
        return AssistantConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    # A file with only comments loads as None.
    if raw is None:
        return AssistantConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    return AssistantConfig(**raw)
