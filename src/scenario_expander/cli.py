import click
import logging
from pathlib import Path

from .core import ConfigManager, ExpanderConfig, RunMode, ScenarioExpanderError
from .bdd.parser import FeatureParser
from .bdd.expander import ScenarioExpander
from .bdd.recomposer import replace_scenarios
from .bdd.templates import TemplateEngine
from .pipeline import ExpansionPipeline, RunResult
from . import __version__

logger = logging.getLogger(__name__)


def fail(error: Exception) -> None:
    """Report a fatal error and stop"""
    logger.error(str(error))
    click.echo(f"Error: {error}", err=True)
    raise SystemExit(1)


def build_config(ctx, mode, **overrides) -> ExpanderConfig:
    try:
        return ExpanderConfig.from_manager(ctx.obj, mode=mode, **overrides)
    except ScenarioExpanderError as e:
        fail(e)


def run_pipeline(config: ExpanderConfig) -> RunResult:
    try:
        return ExpansionPipeline(config).run()
    except ScenarioExpanderError as e:
        fail(e)


def report(result: RunResult, config: ExpanderConfig) -> None:
    if result.mode == RunMode.COUNT:
        # stdout carries one line per concrete scenario and nothing else
        for _ in range(result.scenarios):
            click.echo("1")
    else:
        click.echo(f"Generated {len(result.files)} feature file(s) in {config.output_dir}", err=True)


@click.group()
@click.option('--config', '-c', type=click.Path(), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Scenario Expander - expand tagged Gherkin scenarios"""
    config_path = Path(config) if config else None
    try:
        manager = ConfigManager(config_path)
    except ScenarioExpanderError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    # Setup logging
    level = logging.DEBUG if verbose else str(manager.get("general.log_level", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ctx.obj = manager


@cli.command()
def version():
    """Show version information"""
    click.echo(f"Scenario Expander v{__version__}")


@cli.command()
@click.option('-d', '--input-dir', type=click.Path(), help='Feature files directory')
@click.option('-t', '--tag', help='Tag selecting the scenarios to count')
@click.pass_context
def count(ctx, input_dir, tag):
    """Print one line per concrete scenario"""
    config = build_config(ctx, RunMode.COUNT, input_dir=input_dir, selection_tag=tag)
    report(run_pipeline(config), config)


@cli.command()
@click.option('-d', '--input-dir', type=click.Path(), help='Feature files directory')
@click.option('-o', '--output-dir', type=click.Path(), help='Output directory')
@click.option('-t', '--tag', help='Tag selecting the scenarios to write')
@click.pass_context
def materialize(ctx, input_dir, output_dir, tag):
    """Write every concrete scenario to its own feature file"""
    config = build_config(ctx, RunMode.MATERIALIZE, input_dir=input_dir,
                          output_dir=output_dir, selection_tag=tag)
    report(run_pipeline(config), config)


@cli.command()
@click.pass_context
def run(ctx):
    """Run the mode named in the configuration file"""
    config = build_config(ctx, None)
    report(run_pipeline(config), config)


@cli.command()
@click.argument('feature_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-t', '--tag', help='Tag selecting the scenarios to preview')
@click.pass_context
def preview(ctx, feature_file, tag):
    """Show the expanded scenarios of a feature file"""
    config = build_config(ctx, RunMode.MATERIALIZE, selection_tag=tag)

    try:
        feature = FeatureParser(language=config.language).parse_file(Path(feature_file))
        scenarios = ScenarioExpander().expand_feature(feature, config.selection_tag)
    except ScenarioExpanderError as e:
        fail(e)

    click.echo(TemplateEngine().render_feature(replace_scenarios(feature, scenarios)), nl=False)
    click.echo(f"Total scenarios: {len(scenarios)}", err=True)


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
