# src/trellis/runner.py
"""
Top-level entry points: flatten, evaluate, aggregate, report.
"""
import sys
import time
from typing import TextIO

import click
import structlog
from attrs import define, field

from trellis.aggregate import ResultCounts, sum_results
from trellis.config.models import RunnerConfig
from trellis.evaluator import evaluate
from trellis.flatten import flatten
from trellis.notifications import ConsoleNotifier, LockedNotifier, Notifier
from trellis.outcomes import CaseResult
from trellis.telemetry import StructLogger
from trellis.tree import Test

log: StructLogger = structlog.get_logger("runner")


@define(frozen=True, slots=True)
class RunReport:
    """Everything one run produced."""

    results: tuple[CaseResult, ...] = field(converter=tuple)
    counts: ResultCounts = field()
    duration: float = field(default=0.0)

    @property
    def exit_code(self) -> int:
        return self.counts.exit_code


def run_tree(
    tree: Test,
    *,
    parallel: bool = False,
    sink: TextIO | None = None,
    notifier: Notifier | None = None,
    max_workers: int | None = None,
) -> RunReport:
    """
    Run `tree` and write the summary line to `sink`.

    When `notifier` is None a `ConsoleNotifier` writing to `sink` is used. In
    parallel mode the notifier is wrapped in a `LockedNotifier`.
    """
    if notifier is None:
        notifier = ConsoleNotifier(sink)
    if parallel:
        notifier = LockedNotifier(notifier)

    leaves = flatten(tree)
    run_log = log.bind(mode="parallel" if parallel else "sequential", cases=len(leaves))
    run_log.info("Starting test run", emoji_key="run")

    start = time.monotonic()
    results = evaluate(leaves, notifier, parallel=parallel, max_workers=max_workers)
    duration = time.monotonic() - start

    counts = sum_results(results)
    click.echo(counts.summary(), file=sink if sink is not None else sys.stdout)

    run_log.info(
        "Test run finished",
        passed=counts.passed,
        failed=counts.failed,
        errored=counts.errored,
        duration=round(duration, 3),
    )
    return RunReport(results=results, counts=counts, duration=duration)


def run(tree: Test, *, sink: TextIO | None = None, notifier: Notifier | None = None) -> int:
    """Run `tree` sequentially and return the exit code."""
    return run_tree(tree, parallel=False, sink=sink, notifier=notifier).exit_code


def run_parallel(
    tree: Test,
    *,
    sink: TextIO | None = None,
    notifier: Notifier | None = None,
    max_workers: int | None = None,
) -> int:
    """Run `tree` on a worker pool and return the exit code."""
    return run_tree(
        tree, parallel=True, sink=sink, notifier=notifier, max_workers=max_workers
    ).exit_code


def run_with_config(
    tree: Test,
    config: RunnerConfig,
    *,
    sink: TextIO | None = None,
    notifier: Notifier | None = None,
) -> int:
    return run_tree(
        tree,
        parallel=config.parallel,
        sink=sink,
        notifier=notifier,
        max_workers=config.max_workers,
    ).exit_code


# 🔼⚙️
