"""Tests for application configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from twly.config import DEFAULT_IGNORE, AppConfig, ConfigError, load_config


def write_trc(directory: Path, data: object) -> Path:
    path = directory / ".trc"
    path.write_text(json.dumps(data))
    return path


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.ignore == DEFAULT_IGNORE
        assert config.min_lines == 3
        assert config.min_chars == 100
        assert config.failure_threshold == 95.0
        assert config.legacy_line_count is True

    def test_default_ignore_not_shared(self) -> None:
        first = AppConfig()
        first.ignore.append("build/**")
        assert AppConfig().ignore == DEFAULT_IGNORE

    def test_custom_config(self) -> None:
        config = AppConfig(ignore=["dist"], min_lines=1, min_chars=0, failure_threshold=80)

        assert config.ignore == ["dist"]
        assert config.min_lines == 1
        assert config.min_chars == 0
        assert config.failure_threshold == 80

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"min_lines": 0}, "minLines"),
            ({"min_lines": "3"}, "minLines"),
            ({"min_chars": -1}, "minChars"),
            ({"min_chars": 1.5}, "minChars"),
            ({"failure_threshold": "high"}, "failureThreshold"),
            ({"failure_threshold": True}, "failureThreshold"),
            ({"failure_threshold": 101}, "failureThreshold"),
            ({"failure_threshold": -5}, "failureThreshold"),
            ({"ignore": "node_modules"}, "ignore"),
            ({"legacy_line_count": "yes"}, "legacyLineCount"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict, message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            AppConfig(**kwargs)

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    def test_as_dict(self) -> None:
        data = AppConfig().as_dict()
        assert set(data) == {
            "ignore",
            "min_lines",
            "min_chars",
            "failure_threshold",
            "legacy_line_count",
        }


class TestLoadConfig:
    """Test load_config function."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == AppConfig()

    def test_reads_trc(self, tmp_path: Path) -> None:
        write_trc(
            tmp_path,
            {
                "ignore": ["vendor/**"],
                "minLines": 2,
                "minChars": 20,
                "failureThreshold": 80,
                "legacyLineCount": False,
            },
        )

        config = load_config(tmp_path)

        assert config.ignore == ["vendor/**"]
        assert config.min_lines == 2
        assert config.min_chars == 20
        assert config.failure_threshold == 80
        assert config.legacy_line_count is False

    def test_null_ignore_means_nothing_ignored(self, tmp_path: Path) -> None:
        write_trc(tmp_path, {"ignore": None})
        assert load_config(tmp_path).ignore == []

    def test_zero_min_chars_kept(self, tmp_path: Path) -> None:
        write_trc(tmp_path, {"minChars": 0})
        assert load_config(tmp_path).min_chars == 0

    def test_explicit_path(self, tmp_path: Path) -> None:
        other = tmp_path / "custom.json"
        other.write_text(json.dumps({"minLines": 5}))

        assert load_config(tmp_path, other).min_lines == 5

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path, tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / ".trc").write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(tmp_path)

    def test_non_object(self, tmp_path: Path) -> None:
        write_trc(tmp_path, ["ignore"])
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(tmp_path)

    def test_invalid_value_in_file(self, tmp_path: Path) -> None:
        write_trc(tmp_path, {"minChars": -10})
        with pytest.raises(ConfigError, match="minChars"):
            load_config(tmp_path)

    def test_unknown_key_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        write_trc(tmp_path, {"colour": "green"})

        with caplog.at_level(logging.WARNING, logger="twly.config"):
            config = load_config(tmp_path)

        assert config == AppConfig()
        assert "colour" in caplog.text

    def test_overrides_take_precedence(self, tmp_path: Path) -> None:
        write_trc(tmp_path, {"minLines": 2, "failureThreshold": 80})

        config = load_config(tmp_path, min_lines=4, failure_threshold=None)

        assert config.min_lines == 4
        assert config.failure_threshold == 80

    def test_unknown_override(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration option"):
            load_config(tmp_path, colour="green")
