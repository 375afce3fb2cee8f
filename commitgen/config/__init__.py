"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitgen import DEFAULT_MAX_DIFF_CHARS

MODEL_ENV_VAR = "COMMITGEN_MODEL"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    model: Optional[str] = None
    cli_command: str = "claude"
    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS
    temperature: float = 0.3

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.cli_command, str) or not self.cli_command.strip():
            warnings.append(f"Invalid cli_command '{self.cli_command}', using '{defaults.cli_command}'")
            self.cli_command = defaults.cli_command

        if not isinstance(self.max_diff_chars, int) or isinstance(self.max_diff_chars, bool) or self.max_diff_chars <= 0:
            warnings.append(f"Invalid max_diff_chars '{self.max_diff_chars}', using {defaults.max_diff_chars}")
            self.max_diff_chars = defaults.max_diff_chars

        if not isinstance(self.temperature, (int, float)) or not 0 <= self.temperature <= 1:
            warnings.append(f"Invalid temperature '{self.temperature}', using {defaults.temperature}")
            self.temperature = defaults.temperature

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads configuration from .commitgenrc (local first, then home)."""

    CONFIG_FILENAME = ".commitgenrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                break
        else:
            self._config = Config()

        env_model = os.environ.get(MODEL_ENV_VAR)
        if env_model:
            self._config.model = env_model
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "MODEL_ENV_VAR",
]
