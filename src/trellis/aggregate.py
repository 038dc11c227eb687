# src/trellis/aggregate.py

"""
Reduces per-test results to counts, a summary line and an exit code.
"""

from collections import Counter
from collections.abc import Iterable

from attrs import define, field

from trellis.outcomes import CaseResult, OutcomeKind

FAILED_BIT = 1
ERRORED_BIT = 2


def _validate_non_negative(inst, attr, value: int) -> None:
    if value < 0:
        raise ValueError(f"Field '{attr.name}' must be >= 0, got {value}")


@define(frozen=True, slots=True)
class ResultCounts:
    """Per-kind totals over all outcomes of one run."""

    passed: int = field(default=0, validator=_validate_non_negative)
    failed: int = field(default=0, validator=_validate_non_negative)
    errored: int = field(default=0, validator=_validate_non_negative)

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errored

    @property
    def exit_code(self) -> int:
        return exit_code(self)

    def summary(self) -> str:
        return (
            f"{self.total} tests run: {self.passed} passed, "
            f"{self.failed} failed, {self.errored} errored"
        )

    def __str__(self) -> str:
        return self.summary()


def sum_results(results: Iterable[CaseResult]) -> ResultCounts:
    """Count outcomes by kind. The order of `results` does not matter."""
    counts = Counter(result.kind for result in results)
    return ResultCounts(
        passed=counts[OutcomeKind.PASSED],
        failed=counts[OutcomeKind.FAILED],
        errored=counts[OutcomeKind.ERRORED],
    )


def exit_code(counts: ResultCounts) -> int:
    """Bit 0 is set when anything failed, bit 1 when anything errored."""
    code = 0
    if counts.failed > 0:
        code |= FAILED_BIT
    if counts.errored > 0:
        code |= ERRORED_BIT
    return code


# 🔼⚙️
