import logging

import pytest
import structlog

from helpers import RecordingNotifier, failing, passing, raising
from trellis.results import Fail
from trellis.tree import Case, Label, TestList


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep library logging quiet on stdout and undo any logging setup a test performed."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)


@pytest.fixture
def recorder() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def scenario_a() -> TestList:
    """One passing and one failing case, unlabelled."""
    return TestList([Case(passing), Case(failing)])


@pytest.fixture
def scenario_b() -> Label:
    """A labelled suite with one raising and one passing case."""
    return Label("Suite", TestList([Label("t1", Case(raising)), Label("t2", Case(passing))]))


@pytest.fixture
def half_failing_suite() -> Label:
    """100 labelled cases, alternating between pass and fail."""
    children = []
    for i in range(100):
        code = passing if i % 2 == 0 else (lambda i=i: Fail(f"case {i} failed"))
        children.append(Label(f"case{i:03d}", Case(code)))
    return Label("Bulk", TestList(children))
