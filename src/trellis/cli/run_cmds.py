# src/trellis/cli/run_cmds.py

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
import structlog

from trellis.cli.utils import (
    HARNESS_ERROR_EXIT,
    config_path_option,
    load_config_or_exit,
    logging_options,
    setup_logging_from_context,
)
from trellis.config import TrellisConfig
from trellis.discovery import from_modules
from trellis.exceptions import DiscoveryError, HarnessError
from trellis.flatten import flatten
from trellis.runner import run_tree
from trellis.telemetry import StructLogger
from trellis.tree import TestList

log: StructLogger = structlog.get_logger("cli.run")


def _prepare(ctx: click.Context, config_path: Path | None, **kwargs) -> TrellisConfig:
    """Set up logging and load configuration for a command."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )
    config = load_config_or_exit(ctx, config_path)

    # The config file's log level applies only if nothing more specific was given.
    if config_path is not None and not (kwargs.get("log_level") or ctx.obj.get("LOG_LEVEL")):
        setup_logging_from_context(
            ctx,
            local_log_level=config.global_config.log_level,
            local_log_file=kwargs.get("log_file"),
            local_json_logs=kwargs.get("json_logs"),
        )
    return config


@contextmanager
def _working_directory_importable() -> Iterator[None]:
    """Put the working directory on sys.path for the duration of discovery."""
    saved = list(sys.path)
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        yield
    finally:
        sys.path[:] = saved


def _discover(ctx: click.Context, modules: tuple[str, ...], config: TrellisConfig) -> TestList:
    """Import the requested modules, falling back to the configured ones."""
    module_names = modules or config.runner.modules
    if not module_names:
        click.echo("Error: No test modules given on the command line or in [runner].modules.", err=True)
        ctx.exit(HARNESS_ERROR_EXIT)

    # Modules in the working directory are importable, as with `python -m`.
    try:
        with _working_directory_importable():
            return from_modules(module_names)
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        if e.details is not None:
            click.echo(f"  {type(e.details).__name__}: {e.details}", err=True)
        ctx.exit(HARNESS_ERROR_EXIT)


@click.command(name="run")
@click.argument("modules", nargs=-1)
@click.option(
    "--parallel/--sequential",
    default=None,
    envvar="TRELLIS_PARALLEL",
    help="Run tests on a worker pool (overrides config file).",
)
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    envvar="TRELLIS_MAX_WORKERS",
    help="Worker pool size for --parallel (default: number of CPUs).",
)
@config_path_option
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    modules: tuple[str, ...],
    parallel: bool | None,
    workers: int | None,
    config_path: Path | None,
    **kwargs,
):
    """Discover and run the tests in MODULES (dotted import names)."""
    config = _prepare(ctx, config_path, **kwargs)
    tree = _discover(ctx, modules, config)

    use_parallel = config.runner.parallel if parallel is None else parallel
    max_workers = workers if workers is not None else config.runner.max_workers
    log.info("Executing 'run' command", modules=list(modules), parallel=use_parallel, workers=max_workers)

    try:
        report = run_tree(
            tree,
            parallel=use_parallel,
            max_workers=max_workers,
        )
    except HarnessError as e:
        log.critical("Test run aborted by a harness fault", error=str(e), exc_info=True)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(HARNESS_ERROR_EXIT)

    ctx.exit(report.exit_code)


@click.command(name="list")
@click.argument("modules", nargs=-1)
@config_path_option
@logging_options
@click.pass_context
def list_cli(ctx: click.Context, modules: tuple[str, ...], config_path: Path | None, **kwargs):
    """Print the qualified names of the tests in MODULES, in run order."""
    config = _prepare(ctx, config_path, **kwargs)
    tree = _discover(ctx, modules, config)

    leaves = flatten(tree)
    for leaf in leaves:
        click.echo(leaf.name)
    click.echo(f"{len(leaves)} tests found")


# 🔼⚙️
