from typing import Iterable, Optional

from behave.i18n import languages
from jinja2 import Environment, StrictUndefined

from .model import Feature, Scenario, Step


DEFAULT_LANGUAGE = "en"

FEATURE_TEMPLATE = '''\
{% if feature.language and feature.language != "en" %}
# language: {{ feature.language }}
{% endif %}
{% if feature.tags %}
{{ feature.tags | tagline }}
{% endif %}
{{ feature.keyword }}: {{ feature.name }}
{% for line in feature.description %}
  {{ line }}
{% endfor %}
{% for scenario in feature.scenarios %}

{% if scenario.tags %}
  {{ scenario.tags | tagline }}
{% endif %}
  {{ scenario_keyword(scenario, feature.language) }}: {{ scenario.name }}
{% for step in scenario.steps %}
    {{ step.keyword }} {{ step.text }}
{% if step.docstring is not none %}
{% set delimiter = step | docstring_delimiter %}
      {{ delimiter }}{{ step.docstring_content_type or "" }}
{% for line in step.docstring.splitlines() %}
      {{ line }}
{% endfor %}
      {{ delimiter }}
{% endif %}
{% if step.table %}
{% for row in step.table.rows %}
      | {{ row | map("cell") | join(" | ") }} |
{% endfor %}
{% endif %}
{% endfor %}
{% endfor %}
'''


def tagline(tags: Iterable[str]) -> str:
    return " ".join(f"@{tag}" for tag in tags)


def cell(value: str) -> str:
    """Escape pipes so a cell reads back as one cell"""
    return value.replace("|", "\\|")


def docstring_delimiter(step: Step) -> str:
    # A content line starting with the delimiter would close the block early
    lines = [line.strip() for line in step.docstring.splitlines()]
    if any(line.startswith('"""') for line in lines):
        return "'''"
    return '"""'


def scenario_keyword(scenario: Scenario, language: Optional[str]) -> str:
    """
    Plain scenario keyword of the feature language.

    Outlines are written as plain scenarios once expanded; a scenario
    keeps its own keyword when it already is a plain one.
    """
    if not language or language == DEFAULT_LANGUAGE:
        return "Scenario"

    keywords = [keyword.strip() for keyword in languages.get(language, {}).get("scenario", [])]
    if scenario.keyword in keywords:
        return scenario.keyword
    return keywords[0] if keywords else "Scenario"


class TemplateEngine:
    """Renders features back into Gherkin text"""

    def __init__(self):
        self.env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["tagline"] = tagline
        self.env.filters["cell"] = cell
        self.env.filters["docstring_delimiter"] = docstring_delimiter
        self.env.globals["scenario_keyword"] = scenario_keyword
        self.feature_template = self.env.from_string(FEATURE_TEMPLATE)

    def render_feature(self, feature: Feature) -> str:
        """
        Render a feature as Gherkin.

        Expanded scenarios are always written as plain scenario blocks in
        the feature's language, the background is not rendered.
        """
        return self.feature_template.render(feature=feature)
