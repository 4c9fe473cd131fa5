import os
import yaml
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError


class RunMode(Enum):
    """What the pipeline does with the expanded scenarios"""
    COUNT = "count"
    MATERIALIZE = "materialize"


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base, nested mappings key by key"""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Manages configuration for Scenario Expander"""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config = self._load_config()

    def _get_default_config_path(self) -> Path:
        """Get default configuration path"""
        # Check environment variable first
        if env_path := os.getenv("SCENARIO_EXPANDER_CONFIG"):
            return Path(env_path)

        locations = [
            Path.cwd() / "scenario-expander.yaml",
            Path.cwd() / ".scenario-expander" / "config.yaml",
            Path.home() / ".scenario-expander" / "config.yaml",
        ]

        for location in locations:
            if location.exists():
                return location

        return Path.home() / ".scenario-expander" / "config.yaml"

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file, merged over the defaults"""
        config = self._get_default_config()
        if not self.config_path.exists():
            return config

        with open(self.config_path, 'r') as f:
            if self.config_path.suffix in ('.yaml', '.yml'):
                loaded = yaml.safe_load(f) or {}
            elif self.config_path.suffix == '.json':
                loaded = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config format: {self.config_path.suffix}")

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {self.config_path} must contain a mapping")

        return merge_config(config, loaded)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            "general": {
                "log_level": "INFO",
            },
            "expander": {
                "input_dir": "./features/",
                "output_dir": "./expanded/",
                "mode": "count",  # count, materialize
                "language": None,
                "file_extension": ".feature",
                "tags": {
                    "count": "tc_login_001",
                    "materialize": "automated",
                },
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value


def parse_mode(value: Any) -> RunMode:
    """Turn a config or CLI value into a RunMode"""
    if isinstance(value, RunMode):
        return value
    try:
        return RunMode(str(value).lower())
    except ValueError:
        choices = ", ".join(mode.value for mode in RunMode)
        raise ConfigurationError(f"Unknown mode '{value}', expected one of: {choices}") from None


def normalize_tag(tag: Optional[str]) -> str:
    """Tags are stored without the leading '@' by the parser"""
    return (tag or "").strip().lstrip("@")


@dataclass
class ExpanderConfig:
    """Configuration for one pipeline run"""
    input_dir: Path = Path("./features/")
    output_dir: Path = Path("./expanded/")
    selection_tag: str = "tc_login_001"
    mode: RunMode = RunMode.COUNT
    language: Optional[str] = None
    file_extension: str = ".feature"

    def __post_init__(self):
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        self.mode = parse_mode(self.mode)
        self.selection_tag = normalize_tag(self.selection_tag)

    @classmethod
    def from_manager(cls, manager: ConfigManager, mode: Optional[Any] = None,
                     **overrides: Any) -> "ExpanderConfig":
        """
        Build a run configuration from the loaded config file.

        Args:
            manager: Loaded configuration
            mode: Run mode, defaults to ``expander.mode``
            overrides: Field values that win over the file (None is ignored)

        Returns:
            Validated ExpanderConfig
        """
        run_mode = parse_mode(mode if mode is not None else manager.get("expander.mode", "count"))

        values = {
            "input_dir": manager.get("expander.input_dir", "./features/"),
            "output_dir": manager.get("expander.output_dir", "./expanded/"),
            "selection_tag": manager.get(f"expander.tags.{run_mode.value}"),
            "mode": run_mode,
            "language": manager.get("expander.language"),
            "file_extension": manager.get("expander.file_extension", ".feature"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError when the configuration cannot be used"""
        if not self.selection_tag:
            raise ConfigurationError(f"No selection tag configured for mode '{self.mode.value}'")
        if not self.file_extension.startswith("."):
            raise ConfigurationError(f"File extension must start with '.': {self.file_extension}")
