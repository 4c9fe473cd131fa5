from dataclasses import replace
from typing import Iterable, List, Optional
import logging

from .examples import ExampleData, substitute_placeholders
from .model import Background, Feature, Scenario


def filter_by_tag(scenarios: Iterable[Scenario], tag: str) -> List[Scenario]:
    """Keep scenarios tagged with exactly ``tag``, in order"""
    return [scenario for scenario in scenarios if tag in scenario.tags]


def prepend_background_steps(background: Optional[Background], scenario: Scenario) -> Scenario:
    """Return a copy of scenario with the background steps in front of its own"""
    if background is None:
        return scenario
    return replace(scenario, steps=tuple(background.steps) + tuple(scenario.steps))


class ScenarioExpander:
    """
    Resolves scenarios into concrete scenarios:
    - tag filtering
    - background merging
    - one copy per example row with placeholders substituted
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def expand(self, scenario: Scenario) -> List[Scenario]:
        """
        Expand a scenario with its example tables.

        Args:
            scenario: Scenario, background already merged

        Returns:
            One scenario per data row, or the scenario itself when
            there are no data rows
        """
        example = ExampleData.from_tables(scenario.examples, scenario.name)

        # No parameterization: pass through unchanged
        if not example:
            return [scenario]

        scenarios = []
        for row in example:
            steps = tuple(
                replace(step, text=substitute_placeholders(step.text, row))
                for step in scenario.steps
            )
            scenarios.append(replace(scenario, steps=steps))

        self.logger.debug(f"Expanded '{scenario.name}' into {len(scenarios)} scenarios")
        return scenarios

    def filter_and_merge(self, feature: Feature, tag: str) -> List[Scenario]:
        """Select scenarios by tag and merge the feature background into them"""
        return [
            prepend_background_steps(feature.background, scenario)
            for scenario in filter_by_tag(feature.scenarios, tag)
        ]

    def expand_feature(self, feature: Feature, tag: str) -> List[Scenario]:
        """Filter, merge background, then expand every selected scenario"""
        scenarios = []
        for scenario in self.filter_and_merge(feature, tag):
            scenarios.extend(self.expand(scenario))
        return scenarios
