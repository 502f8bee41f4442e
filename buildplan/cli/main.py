"""Command-line interface for buildplan.

Provides CLI commands for compiling project scripts into an execution plan.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from buildplan import __version__


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("buildplan")


def _load_project(config: str):
    from buildplan.config import ProjectConfig, ProjectConfigError

    try:
        return ProjectConfig.load(config)
    except ProjectConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _compile_or_exit(project, mode: str, logger: logging.Logger, **overrides):
    from buildplan.core.compiler import ScriptConfigError

    try:
        return project.compile(mode=mode, logger=logger, **overrides)
    except ScriptConfigError as e:
        logger.debug("Compilation failed: %s", e.to_dict())
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


mode_option = click.option(
    "--mode",
    type=click.Choice(["development", "production"]),
    default="development",
    show_default=True,
    help="Selects the dependency directory mounted at /web_modules",
)


@click.group()
@click.version_option(version=__version__, prog_name="buildplan")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """buildplan: compile dev-server scripts into an ordered execution plan.

    Reads the "scripts" and "plugins" of a project file and produces the
    validated, ordered plan a build or dev-server engine consumes.

    Examples:

        # Compile and print the plan as JSON
        buildplan compile --config buildplan.yaml

        # Compile for production and write the plan to a file
        buildplan compile -c buildplan.yaml --mode production -o plan.yaml

        # Keep a stage log and a JSON-lines history of compiled plans
        buildplan compile -c buildplan.yaml --log-file logs/compile.log --record logs/plans.jsonl

        # Check a configuration without producing output
        buildplan validate -c buildplan.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Project configuration file (YAML or JSON)")
@mode_option
@click.option("--bundle/--no-bundle", default=None,
              help="Require a bundle script (overrides devOptions.bundle)")
@click.option("--out", "-o", "output_path", type=click.Path(),
              help="Write the plan to this file (.json, .yaml)")
@click.option("--log-file", type=click.Path(),
              help="Write the compile stage log to a timestamped file based on this path")
@click.option("--record", "record_path", type=click.Path(),
              help="Append a record of the compiled plan (.jsonl for JSON lines, else YAML)")
@click.pass_context
def compile(
    ctx: click.Context,
    config: str,
    mode: str,
    bundle: Optional[bool],
    output_path: Optional[str],
    log_file: Optional[str],
    record_path: Optional[str],
) -> None:
    """Compile project scripts into an ordered plan."""
    from buildplan.core.compiler.export import export_plan, plan_to_dict
    from buildplan.io import append_plan_record, close_logger, get_logger, plan_record

    logger = ctx.obj["logger"]
    if log_file:
        level = logging.DEBUG if ctx.obj["debug"] else logging.INFO
        logger, log_path = get_logger(log_file, mode=mode, level=level)
        click.echo(f"Compile log: {log_path}", err=True)

    try:
        logger.info(f"Loading project config: {config}")
        project = _load_project(config)
        overrides = {} if bundle is None else {"bundle_requested": bundle}
        plan = _compile_or_exit(project, mode, logger, **overrides)

        if record_path:
            append_plan_record(record_path, plan_record(plan, config=config, mode=mode))
            logger.info(f"Plan record appended to: {record_path}")
    finally:
        if log_file:
            close_logger(logger)

    if output_path:
        export_plan(plan, Path(output_path))
        click.echo(f"Compiled {len(plan)} scripts -> {output_path}")
    else:
        import json

        click.echo(json.dumps(plan_to_dict(plan), indent=2))


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Project configuration file (YAML or JSON)")
@mode_option
@click.pass_context
def validate(ctx: click.Context, config: str, mode: str) -> None:
    """Validate project scripts and plugins without writing output."""
    logger = ctx.obj["logger"]
    project = _load_project(config)
    plan = _compile_or_exit(project, mode, logger)
    click.echo(f"Validation PASSED: {len(plan)} scripts")


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Project configuration file (YAML or JSON)")
@mode_option
@click.pass_context
def show(ctx: click.Context, config: str, mode: str) -> None:
    """Show the compiled plan in evaluation order (dry run)."""
    logger = ctx.obj["logger"]

    from buildplan.core.compiler import format_plan_summary

    project = _load_project(config)
    plan = _compile_or_exit(project, mode, logger)
    click.echo(format_plan_summary(plan))


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
