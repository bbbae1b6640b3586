"""Tests for config loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sda.config import load_config
from sda.schemas.config import AssistantConfig


class TestAssistantConfig:
    """Test the AssistantConfig Pydantic model directly."""

    def test_defaults(self) -> None:
        cfg = AssistantConfig()
        assert cfg.model == "gpt-4o"
        assert cfg.port == 8000
        assert cfg.default_language == "typescript"

    def test_output_budget_is_not_configurable(self) -> None:
        cfg = AssistantConfig(max_tokens=4000)
        assert not hasattr(cfg, "max_tokens")

    def test_port_range(self) -> None:
        with pytest.raises(ValidationError, match="port"):
            AssistantConfig(port=70000)

    def test_model_not_empty(self) -> None:
        with pytest.raises(ValidationError, match="model"):
            AssistantConfig(model="  ")


class TestLoadConfig:
    """Test YAML file loading."""

    def test_no_path_gives_defaults(self) -> None:
        assert load_config(None) == AssistantConfig()

    def test_load_valid_file(self, tmp_config: Path) -> None:
        cfg = load_config(tmp_config)
        assert cfg.model == "gpt-4o-mini"
        assert cfg.port == 9000
        assert cfg.default_language == "python"

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/config.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yml"
        bad.write_text("just a string")
        with pytest.raises(ValueError, match="YAML mapping"):
            load_config(bad)

    def test_comment_only_file(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yml"
        cfg_file.write_text("# model: gpt-4o\n")
        assert load_config(cfg_file) == AssistantConfig()
