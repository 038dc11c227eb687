"""Test bodies and notifiers shared by the unit tests."""

import threading
import time

from trellis.results import fail, ok


def passing():
    return ok()


def failing():
    return fail("x≠y")


def raising():
    raise ValueError("boom")


class RecordingNotifier:
    """Notifier that records every hook call, thread-safely."""

    def __init__(self):
        self.events: list[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *event) -> None:
        with self._lock:
            self.events.append(event)

    def before_run(self, name: str) -> None:
        self._record("before_run", name)

    def on_passed(self, name: str) -> None:
        self._record("passed", name)

    def on_failed(self, name: str, message: str) -> None:
        self._record("failed", name, message)

    def on_exception(self, name: str, cause: Exception) -> None:
        self._record("exception", name, cause)

    def names(self, hook: str) -> list[str]:
        return [event[1] for event in self.events if event[0] == hook]


class OverlapDetectingSink:
    """
    Text sink that notices when two writes are in progress at once.

    Each write holds the sink "busy" for a moment; a second writer arriving
    during that window is counted as an overlap.
    """

    def __init__(self, delay: float = 0.0005):
        self.delay = delay
        self.lines: list[str] = []
        self.overlaps = 0
        self._busy = False
        self._guard = threading.Lock()

    def write(self, text: str) -> int:
        with self._guard:
            if self._busy:
                self.overlaps += 1
            self._busy = True
        time.sleep(self.delay)
        with self._guard:
            self.lines.append(text)
            self._busy = False
        return len(text)

    def flush(self) -> None:
        pass

    def isatty(self) -> bool:
        return False

    def getvalue(self) -> str:
        return "".join(self.lines)
