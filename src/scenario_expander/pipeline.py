import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .core import ExpanderConfig, InputError, OutputError, RunMode
from .bdd.expander import ScenarioExpander
from .bdd.model import Feature, Scenario
from .bdd.parser import FeatureParser
from .bdd.recomposer import replace_scenarios, split_feature
from .bdd.templates import TemplateEngine

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a pipeline run"""
    mode: RunMode
    documents: int = 0
    scenarios: int = 0
    files: List[Path] = field(default_factory=list)


class ExpansionPipeline:
    """
    Reads every document of the input directory, selects scenarios by tag,
    merges backgrounds, expands example tables and either counts the
    concrete scenarios or writes each one to its own feature file.

    Any error stops the run.
    """

    def __init__(self, config: ExpanderConfig):
        config.validate()
        self.config = config
        self.parser = FeatureParser(language=config.language)
        self.expander = ScenarioExpander()
        self.template_engine = TemplateEngine()

    def discover(self) -> List[Path]:
        """List input documents, sorted by name"""
        input_dir = self.config.input_dir
        try:
            paths = sorted(input_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise InputError(f"Cannot read input directory {input_dir}: {e}") from e

        logger.info(f"Found {len(paths)} documents in {input_dir}")
        return paths

    def load_features(self) -> List[Feature]:
        return [self.parser.parse_file(path) for path in self.discover()]

    def expand_feature(self, feature: Feature) -> List[Scenario]:
        scenarios = self.expander.expand_feature(feature, self.config.selection_tag)
        logger.info(f"{feature.filename or feature.name}: {len(scenarios)} concrete scenarios")
        return scenarios

    def run(self, mode: Optional[RunMode] = None) -> RunResult:
        """Run in the given mode, defaulting to the configured one"""
        mode = mode or self.config.mode
        if mode == RunMode.MATERIALIZE:
            return self.materialize()
        return self.count()

    def count(self) -> RunResult:
        """Count concrete scenarios without writing anything"""
        features = self.load_features()
        result = RunResult(mode=RunMode.COUNT, documents=len(features))

        for feature in features:
            result.scenarios += len(self.expand_feature(feature))

        logger.info(f"Counted {result.scenarios} scenarios tagged '{self.config.selection_tag}'")
        return result

    def build_single_scenario_features(self, features: List[Feature]) -> List[Feature]:
        """Expanded features split into one feature per concrete scenario"""
        single_features = []
        for feature in features:
            expanded = replace_scenarios(feature, self.expand_feature(feature))
            if not expanded.scenarios:
                logger.debug(f"Skipping {feature.filename or feature.name}: no scenarios left")
                continue
            single_features.extend(split_feature(expanded))
        return single_features

    def remove_stale_files(self) -> None:
        """Delete numbered feature files left over from an earlier run"""
        extension = self.config.file_extension
        for path in sorted(self.config.output_dir.glob(f"*{extension}")):
            if not (path.is_file() and path.name[:-len(extension)].isdigit()):
                continue
            try:
                path.unlink()
            except OSError as e:
                raise OutputError(f"Cannot remove stale file {path}: {e}") from e
            logger.info(f"Removed stale file: {path}")

    def materialize(self) -> RunResult:
        """Write every concrete scenario to its own feature file"""
        features = self.load_features()
        single_features = self.build_single_scenario_features(features)

        result = RunResult(mode=RunMode.MATERIALIZE, documents=len(features))
        output_dir = self.config.output_dir

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Cannot create output directory {output_dir}: {e}") from e

        self.remove_stale_files()

        for index, feature in enumerate(single_features):
            filepath = output_dir / f"{index}{self.config.file_extension}"
            gherkin = self.template_engine.render_feature(feature)
            try:
                filepath.write_text(gherkin, encoding="utf-8")
            except OSError as e:
                raise OutputError(f"Cannot write {filepath}: {e}") from e

            logger.info(f"Generated: {filepath}")
            result.files.append(filepath)

        result.scenarios = len(result.files)
        logger.info(f"Wrote {len(result.files)} feature files to {output_dir}")
        return result
