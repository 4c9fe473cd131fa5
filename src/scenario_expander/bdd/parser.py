import logging
from pathlib import Path
from typing import Optional

from behave.parser import parse_feature, ParserError

from ..core.exceptions import FeatureParseError, InputError
from .model import Background, DataTable, ExampleTable, Feature, Scenario, Step

logger = logging.getLogger(__name__)


class FeatureParser:
    """
    Parses Gherkin documents with behave and converts the result
    into the immutable model used by the expander.
    """

    def __init__(self, language: Optional[str] = None):
        self.language = language
        self._source_lines = []

    def parse_file(self, path: Path) -> Feature:
        """Read and parse one feature file"""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise InputError(f"Cannot read feature file {path}: {e}") from e

        return self.parse(content, filename=str(path))

    def parse(self, content: str, filename: Optional[str] = None) -> Feature:
        """
        Parse Gherkin text.

        Args:
            content: Document text
            filename: Reported in errors and kept on the feature

        Returns:
            Parsed Feature

        Raises:
            FeatureParseError: on syntax errors or a document without a feature
        """
        try:
            feature = parse_feature(content, language=self.language, filename=filename)
        except ParserError as e:
            raise FeatureParseError(f"Cannot parse {filename or 'feature'}: {e}") from e

        if feature is None:
            raise FeatureParseError(f"No feature found in {filename or 'document'}")

        self._source_lines = content.splitlines()
        logger.debug(f"Parsed feature '{feature.name}' with {len(feature.scenarios)} scenarios")
        return self._convert_feature(feature, filename)

    def _convert_feature(self, feature, filename: Optional[str]) -> Feature:
        background = None
        if feature.background is not None:
            background = Background(
                steps=tuple(self._convert_step(step) for step in feature.background.steps)
            )

        scenarios = [self._convert_scenario(s) for s in feature.scenarios]

        # Rule scenarios follow the feature's own scenarios, with the rule
        # background in front of their steps
        for rule in getattr(feature, "rules", None) or []:
            rule_steps = ()
            if getattr(rule, "background", None) is not None:
                rule_steps = tuple(self._convert_step(step) for step in rule.background.steps)
            for scenario in rule.scenarios:
                scenarios.append(self._convert_scenario(scenario, rule_steps))

        return Feature(
            name=feature.name,
            keyword=feature.keyword.strip(),
            tags=tuple(str(tag) for tag in feature.tags),
            description=tuple(feature.description or ()),
            background=background,
            scenarios=tuple(scenarios),
            filename=filename,
            language=getattr(feature, "language", None) or self.language,
        )

    def _convert_scenario(self, scenario, leading_steps=()) -> Scenario:
        examples = []
        # Only outlines carry examples; blocks without a table are skipped
        for example in getattr(scenario, "examples", None) or []:
            if example.table is None:
                continue
            examples.append(ExampleTable(
                rows=self._convert_table_rows(example.table),
                name=example.name or "",
                tags=tuple(str(tag) for tag in example.tags),
            ))

        return Scenario(
            name=scenario.name,
            tags=tuple(str(tag) for tag in scenario.tags),
            steps=tuple(leading_steps) + tuple(self._convert_step(step) for step in scenario.steps),
            examples=tuple(examples),
            keyword=scenario.keyword.strip(),
        )

    def _convert_step(self, step) -> Step:
        table = None
        if step.table is not None:
            table = DataTable(rows=self._convert_table_rows(step.table))

        docstring = content_type = None
        if step.text is not None:
            docstring = str(step.text)
            content_type = self._docstring_content_type(step.text)

        return Step(
            keyword=step.keyword.strip(),
            text=step.name,
            step_type=step.step_type,
            docstring=docstring,
            docstring_content_type=content_type,
            table=table,
        )

    def _docstring_content_type(self, text) -> Optional[str]:
        # behave drops what follows the opening delimiter, read it from the source
        line = getattr(text, "line", 0)
        if not 0 < line <= len(self._source_lines):
            return None
        opening = self._source_lines[line - 1].strip()
        return opening[3:].strip() or None

    @staticmethod
    def _convert_table_rows(table):
        rows = [tuple(table.headings)]
        rows.extend(tuple(row.cells) for row in table.rows)
        return tuple(rows)
