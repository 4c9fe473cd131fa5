from .examples import ExampleData, substitute_placeholders
from .expander import ScenarioExpander, filter_by_tag, prepend_background_steps
from .parser import FeatureParser
from .recomposer import replace_scenarios, split_feature
from .templates import TemplateEngine

__all__ = [
    "ExampleData",
    "substitute_placeholders",
    "ScenarioExpander",
    "filter_by_tag",
    "prepend_background_steps",
    "FeatureParser",
    "replace_scenarios",
    "split_feature",
    "TemplateEngine",
]
