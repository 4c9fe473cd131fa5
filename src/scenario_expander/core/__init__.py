from .config import ConfigManager, ExpanderConfig, RunMode
from .exceptions import (
    ScenarioExpanderError,
    ConfigurationError,
    InputError,
    FeatureParseError,
    InvariantViolationError,
    OutputError,
)

__all__ = [
    # Configuration
    "ConfigManager",
    "ExpanderConfig",
    "RunMode",

    # Exceptions
    "ScenarioExpanderError",
    "ConfigurationError",
    "InputError",
    "FeatureParseError",
    "InvariantViolationError",
    "OutputError",
]
