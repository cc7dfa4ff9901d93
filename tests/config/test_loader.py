"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() function
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from sharpcheck.config.loader import (
    GLOBAL_CONFIG_PATH,
    REPO_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    load_config,
)
from sharpcheck.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is not a config."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        """Override values replace base values."""
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"comment_code": {"enabled": True, "max_window": 8}}
        override = {"comment_code": {"enabled": False}}
        assert _deep_merge(base, override) == {"comment_code": {"enabled": False, "max_window": 8}}

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict override replaces dict base."""
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        """Base dict is not mutated."""
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        """Returns default config when no config files exist."""
        config = load_config(tmp_path)

        assert config.logging.level == "WARNING"
        assert config.comment_code.backward_probe == "first-anchor"
        assert config.console_output.targets[0].members == ["WriteLine", "Write"]

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        """Loads .sharpcheck.yaml from the project root."""
        (tmp_path / REPO_CONFIG_NAME).write_text("comment_code:\n  backward_probe: every-anchor\n")

        config = load_config(tmp_path)

        assert config.comment_code.backward_probe == "every-anchor"

    def test_repo_config_overrides_global(self, tmp_path: Path) -> None:
        """Repo YAML wins over global YAML, key by key."""
        global_file = tmp_path / "global.yaml"
        global_file.write_text("analysis:\n  max_workers: 4\n  max_file_size_kb: 10\n")
        (tmp_path / REPO_CONFIG_NAME).write_text("analysis:\n  max_workers: 2\n")

        with patch("sharpcheck.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.analysis.max_workers == 2
        assert config.analysis.max_file_size_kb == 10

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML config."""
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: INFO\n")

        with patch.dict(os.environ, {"SHARPCHECK__LOGGING__LEVEL": "ERROR"}):
            config = load_config(tmp_path)

        assert config.logging.level == "ERROR"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        from sharpcheck.config.models import CommentCodeConfig

        (tmp_path / REPO_CONFIG_NAME).write_text("comment_code:\n  enabled: true\n")

        config = load_config(tmp_path, comment_code=CommentCodeConfig(enabled=False))

        assert config.comment_code.enabled is False

    def test_explicit_config_file_replaces_repo_file(self, tmp_path: Path) -> None:
        """--config points at a file anywhere."""
        (tmp_path / REPO_CONFIG_NAME).write_text("console_output:\n  enabled: true\n")
        explicit = tmp_path / "other.yaml"
        explicit.write_text("console_output:\n  enabled: false\n")

        config = load_config(tmp_path, config_file=explicit)

        assert config.console_output.enabled is False

    def test_missing_explicit_config_file_raises(self, tmp_path: Path) -> None:
        """A missing explicit file is an error, unlike a missing repo file."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_file=tmp_path / "missing.yaml")

        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid config values."""
        (tmp_path / REPO_CONFIG_NAME).write_text("analysis:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "max_workers" in exc_info.value.message


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_path_object(self) -> None:
        """GLOBAL_CONFIG_PATH is a Path."""
        assert isinstance(GLOBAL_CONFIG_PATH, Path)

    def test_is_in_user_config(self) -> None:
        """Path is in user config directory."""
        assert "sharpcheck" in str(GLOBAL_CONFIG_PATH)
