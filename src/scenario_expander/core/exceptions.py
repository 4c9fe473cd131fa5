class ScenarioExpanderError(Exception):
    """Base exception for Scenario Expander"""
    pass


class ConfigurationError(ScenarioExpanderError):
    """Configuration-related errors"""
    pass


class InputError(ScenarioExpanderError):
    """Input directory or feature file could not be read"""
    pass


class FeatureParseError(InputError):
    """Feature file is not a valid Gherkin document"""
    pass


class InvariantViolationError(ScenarioExpanderError):
    """Example tables of a scenario do not share one row width"""
    pass


class OutputError(ScenarioExpanderError):
    """Output directory or feature file could not be written"""
    pass
