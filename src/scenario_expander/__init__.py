"""
Scenario Expander - tag filtering and example expansion for Gherkin features
"""

__version__ = "0.1.0"
__author__ = "Scenario Expander Contributors"

from .core import ConfigManager, ExpanderConfig, RunMode
from .pipeline import ExpansionPipeline, RunResult

__all__ = [
    "ConfigManager",
    "ExpanderConfig",
    "RunMode",
    "ExpansionPipeline",
    "RunResult",
]
