# src/trellis/notifications.py
#
"""
Notification hooks fired while test cases run.

The engine never writes output itself; it calls a `Notifier`. The default
`ConsoleNotifier` writes one line per outcome to an injectable sink.
"""

import sys
import threading
from collections.abc import Callable
from typing import Protocol, TextIO, runtime_checkable

import click
import structlog
from attrs import define, field

from trellis.outcomes import describe_exception
from trellis.telemetry import StructLogger

log: StructLogger = structlog.get_logger("notifications")


@runtime_checkable
class Notifier(Protocol):
    """
    Protocol for the per-test notification hooks.

    `before_run` is called first for every test; exactly one of the other
    three is called afterwards, once the outcome is known.
    """

    def before_run(self, name: str) -> None: ...

    def on_passed(self, name: str) -> None: ...

    def on_failed(self, name: str, message: str) -> None: ...

    def on_exception(self, name: str, cause: Exception) -> None: ...


def _noop(*args) -> None:
    return None


@define(slots=True)
class CallbackNotifier:
    """Adapts four plain callables to the `Notifier` protocol."""

    before_run: Callable[[str], object] = field(default=_noop)
    on_passed: Callable[[str], object] = field(default=_noop)
    on_failed: Callable[[str, str], object] = field(default=_noop)
    on_exception: Callable[[str, Exception], object] = field(default=_noop)


class ConsoleNotifier:
    """Writes `<name>: Passed` style lines to a text sink (stdout by default)."""

    def __init__(self, sink: TextIO | None = None):
        self._sink = sink

    @property
    def sink(self) -> TextIO:
        # Resolved per write; sys.stdout may be replaced after construction.
        return self._sink if self._sink is not None else sys.stdout

    def _write(self, line: str) -> None:
        click.echo(line, file=self.sink)

    def before_run(self, name: str) -> None:
        log.debug("Starting test", test=name)

    def on_passed(self, name: str) -> None:
        self._write(f"{name}: Passed")

    def on_failed(self, name: str, message: str) -> None:
        self._write(f"{name}: Failed: {message}")

    def on_exception(self, name: str, cause: Exception) -> None:
        self._write(f"{name}: Exception: {describe_exception(cause)}")


class LockedNotifier:
    """
    Serializes every hook of a wrapped notifier on one lock.

    The lock is held only for the duration of a single hook call, so one
    output line is never interleaved with another.
    """

    def __init__(self, inner: Notifier, lock: "threading.Lock | None" = None):
        self.inner = inner
        self.lock = lock or threading.Lock()

    def before_run(self, name: str) -> None:
        with self.lock:
            self.inner.before_run(name)

    def on_passed(self, name: str) -> None:
        with self.lock:
            self.inner.on_passed(name)

    def on_failed(self, name: str, message: str) -> None:
        with self.lock:
            self.inner.on_failed(name, message)

    def on_exception(self, name: str, cause: Exception) -> None:
        with self.lock:
            self.inner.on_exception(name, cause)


# 🔼⚙️
