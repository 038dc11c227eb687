# src/trellis/outcomes.py
#
"""
Per-leaf outcome models produced by the classifier.

Test code only ever signals pass or fail; `Errored` is synthesized by the
classifier when the code raises, and is never returned by test code directly.
"""

from enum import Enum, auto
from typing import TypeAlias

from attrs import define, field


class OutcomeKind(Enum):
    """The three kinds an outcome can be counted as."""

    PASSED = auto()
    FAILED = auto()
    ERRORED = auto()


@define(frozen=True, slots=True)
class Passed:
    kind = OutcomeKind.PASSED

    def __str__(self) -> str:
        return "Passed"


@define(frozen=True, slots=True)
class Failed:
    """The test completed and reported an assertion failure."""

    kind = OutcomeKind.FAILED

    message: str = field()

    def __str__(self) -> str:
        return f"Failed: {self.message}"


@define(frozen=True, slots=True, eq=False)
class Errored:
    """The test raised; the exception is kept for diagnostics."""

    kind = OutcomeKind.ERRORED

    cause: Exception = field()

    def __str__(self) -> str:
        return f"Exception: {describe_exception(self.cause)}"


Outcome: TypeAlias = Passed | Failed | Errored


@define(frozen=True, slots=True)
class CaseResult:
    """A qualified test name paired with its outcome."""

    name: str = field()
    outcome: Outcome = field()

    @property
    def kind(self) -> OutcomeKind:
        return self.outcome.kind


def describe_exception(exc: BaseException) -> str:
    """Render an exception as `Type: message` on a single line."""
    message = str(exc)
    if not message:
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"


# 🔼⚙️
