# src/trellis/evaluator.py
"""
Runs flattened test cases and classifies each outcome.

`execute_one` is the single-test boundary: faults raised by test code are
caught there and turned into `Errored` outcomes. `evaluate_sequential` and
`evaluate_parallel` drive it over a whole flattened suite; neither stops on
the first failure.
"""
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

import structlog

from trellis.exceptions import HarnessError
from trellis.flatten import FlatCase
from trellis.notifications import Notifier
from trellis.outcomes import CaseResult, Errored, Failed, Outcome, Passed
from trellis.results import Fail, Ok, TestCode
from trellis.telemetry import StructLogger

log: StructLogger = structlog.get_logger("evaluator")


def _classify(code: TestCode) -> Outcome:
    try:
        result = code()
    except Exception as e:
        return Errored(e)

    if isinstance(result, Ok):
        return Passed()
    if isinstance(result, Fail):
        return Failed(result.message)
    return Errored(
        TypeError(f"Test code must return Ok or Fail, got {type(result).__name__}")
    )


def execute_one(name: str, code: TestCode, notifier: Notifier) -> CaseResult:
    """
    Run a single test case and notify its outcome.

    Returns:
        The qualified name paired with the classified outcome.

    Raises:
        HarnessError: if a notification hook itself raises. Hook faults are
            not test outcomes and abort the run.
    """
    try:
        notifier.before_run(name)
    except Exception as e:
        log.error("before_run hook failed", test=name, error=str(e))
        raise HarnessError(name, e) from e

    outcome = _classify(code)
    log.debug("Test finished", test=name, outcome=outcome.kind.name, emoji_key=outcome.kind.name.lower())

    try:
        match outcome:
            case Passed():
                notifier.on_passed(name)
            case Failed(message=message):
                notifier.on_failed(name, message)
            case Errored(cause=cause):
                notifier.on_exception(name, cause)
    except Exception as e:
        log.error("Outcome hook failed", test=name, error=str(e))
        raise HarnessError(name, e) from e

    return CaseResult(name, outcome)


def evaluate_sequential(leaves: Iterable[FlatCase], notifier: Notifier) -> list[CaseResult]:
    """Run every leaf in order on the calling thread."""
    return [execute_one(name, code, notifier) for name, code in leaves]


def default_worker_count() -> int:
    return os.cpu_count() or 1


def evaluate_parallel(
    leaves: Iterable[FlatCase],
    notifier: Notifier,
    max_workers: int | None = None,
) -> list[CaseResult]:
    """
    Run every leaf on a fixed-size thread pool.

    The order of the returned results is unspecified. `notifier` is called
    from worker threads and must serialize access to any shared sink (see
    `LockedNotifier`).

    A `HarnessError` raised by any worker aborts the evaluation: leaves that
    have not started are cancelled, leaves already running finish, and the
    error is re-raised.

    Raises:
        ValueError: if `max_workers` is given and is not positive.
    """
    leaves = list(leaves)
    workers = default_worker_count() if max_workers is None else max_workers
    if workers <= 0:
        raise ValueError(f"max_workers must be greater than 0, got {workers}")
    log.debug("Starting worker pool", workers=workers, cases=len(leaves))

    if not leaves:
        return []

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="trellis") as pool:
        futures = [pool.submit(execute_one, name, code, notifier) for name, code in leaves]
        wait(futures, return_when=FIRST_EXCEPTION)
        faulted = next(
            (f for f in futures if f.done() and not f.cancelled() and f.exception() is not None),
            None,
        )
        if faulted is not None:
            pool.shutdown(wait=True, cancel_futures=True)
            cancelled = sum(1 for f in futures if f.cancelled())
            log.error("Aborting parallel run after harness fault", cancelled=cancelled)
            raise faulted.exception()
    return [future.result() for future in futures]


def evaluate(
    leaves: Sequence[FlatCase],
    notifier: Notifier,
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[CaseResult]:
    if parallel:
        return evaluate_parallel(leaves, notifier, max_workers=max_workers)
    return evaluate_sequential(leaves, notifier)


# 🔼⚙️
