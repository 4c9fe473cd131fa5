from dataclasses import replace
from typing import Iterable, List

from .model import Feature, Scenario


def replace_scenarios(feature: Feature, scenarios: Iterable[Scenario]) -> Feature:
    """
    New feature holding the given scenarios.

    The background is dropped since expanded scenarios already carry
    its steps.
    """
    return replace(feature, scenarios=tuple(scenarios), background=None)


def split_feature(feature: Feature) -> List[Feature]:
    """One single-scenario feature per scenario, keeping keyword and name"""
    return [replace(feature, scenarios=(scenario,)) for scenario in feature.scenarios]
