# src/trellis/results.py

"""
The two-armed result returned by test code, and assertion helpers built on it.

A test case is a zero-argument callable returning either `Ok` or
`Fail(message)`. Raising is reserved for unexpected faults; the classifier
turns those into `Errored` outcomes, never into failures.
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from attrs import define, field


@define(frozen=True, slots=True)
class Ok:
    """Success marker returned by a passing test."""

    pass


@define(frozen=True, slots=True)
class Fail:
    """Failure marker carrying the assertion message."""

    message: str = field(converter=str)


Result: TypeAlias = Ok | Fail
TestCode: TypeAlias = Callable[[], Result]

_OK = Ok()


def ok() -> Ok:
    return _OK


def fail(message: str) -> Fail:
    return Fail(message)


def failf(fmt: str, *args: Any) -> Fail:
    """Build a `Fail` from a %-style format string."""
    return Fail(fmt % args if args else fmt)


def assert_equal(expected: Any, actual: Any) -> Result:
    if actual == expected:
        return _OK
    return failf("Expected %r but was %r", expected, actual)


def assert_true(value: Any) -> Result:
    return assert_equal(True, value)


def assert_false(value: Any) -> Result:
    return assert_equal(False, value)


def assert_raises(expected: type[BaseException], fn: Callable[[], Any]) -> Result:
    """
    Call `fn` and check that it raises exactly `expected`.

    Subclasses of `expected` do not match; the helper compares exception
    types, not isinstance relationships.
    """
    try:
        fn()
    except Exception as e:
        return assert_equal(expected, type(e))
    return failf("Expected %s to be raised but nothing was raised", expected.__name__)


def all_of(*results: Result) -> Result:
    """Return the first `Fail` among `results`, or `Ok` if there is none."""
    for result in results:
        if isinstance(result, Fail):
            return result
    return _OK


# 🔼⚙️
