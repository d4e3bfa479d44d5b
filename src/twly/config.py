"""Application configuration defaults and ``.trc`` loading."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = ".trc"
DEFAULT_IGNORE = ["node_modules/**", ".git/**"]

# .trc keys mapped to AppConfig attributes
_FILE_KEYS = {
    "ignore": "ignore",
    "minLines": "min_lines",
    "minChars": "min_chars",
    "failureThreshold": "failure_threshold",
    "legacyLineCount": "legacy_line_count",
}


class ConfigError(ValueError):
    """Raised when configuration is missing required structure or holds invalid values."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(slots=True)
class AppConfig:
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    min_lines: int = 3
    min_chars: int = 100
    failure_threshold: float = 95.0
    legacy_line_count: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.ignore, list) or not all(isinstance(p, str) for p in self.ignore):
            raise ConfigError("ignore must be a list of path patterns")
        if isinstance(self.min_lines, bool) or not isinstance(self.min_lines, int):
            raise ConfigError(f"minLines must be an integer, got {self.min_lines!r}")
        if self.min_lines < 1:
            raise ConfigError(f"minLines must be at least 1, got {self.min_lines}")
        if isinstance(self.min_chars, bool) or not isinstance(self.min_chars, int):
            raise ConfigError(f"minChars must be an integer, got {self.min_chars!r}")
        if self.min_chars < 0:
            raise ConfigError(f"minChars must not be negative, got {self.min_chars}")
        if not _is_number(self.failure_threshold):
            raise ConfigError(f"failureThreshold must be numeric, got {self.failure_threshold!r}")
        if not 0 <= self.failure_threshold <= 100:
            raise ConfigError(
                f"failureThreshold must be a percentage between 0 and 100, got {self.failure_threshold}"
            )
        if not isinstance(self.legacy_line_count, bool):
            raise ConfigError("legacyLineCount must be a boolean")

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def load_config(root: Path, config_path: Path | None = None, **overrides: Any) -> AppConfig:
    """Build the effective configuration for a scan rooted at ``root``.

    Values come from the defaults, then the JSON ``.trc`` file, then any
    non-``None`` keyword overrides (attribute names of :class:`AppConfig`).
    """
    values: Dict[str, Any] = {}

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        source = config_path
    else:
        source = root / CONFIG_FILENAME

    if source.is_file():
        LOGGER.debug("Loading configuration from %s", source)
        for key, value in _read_config_file(source).items():
            if key not in _FILE_KEYS:
                LOGGER.warning("Ignoring unknown config key %r in %s", key, source)
                continue
            if key == "ignore" and value is None:
                value = []
            values[_FILE_KEYS[key]] = value
    else:
        LOGGER.debug("No %s found in %s, using defaults", CONFIG_FILENAME, root)

    for name, value in overrides.items():
        if name not in _FILE_KEYS.values():
            raise ConfigError(f"Unknown configuration option: {name}")
        if value is not None:
            values[name] = value

    return AppConfig(**values)
