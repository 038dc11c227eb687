#
# tests/unit/test_runner.py
#
"""
End-to-end tests for the run entry points.
"""

import io

import pytest

from helpers import OverlapDetectingSink, RecordingNotifier, passing, raising
from trellis.aggregate import ResultCounts
from trellis.config import RunnerConfig
from trellis.exceptions import HarnessError
from trellis.notifications import CallbackNotifier
from trellis.runner import run, run_parallel, run_tree, run_with_config
from trellis.tree import Case, Label, TestList


class TestScenarios:
    """The reference scenarios, run in both modes."""

    def test_scenario_a(self, scenario_a: TestList) -> None:
        sink = io.StringIO()
        report = run_tree(scenario_a, sink=sink)

        assert report.counts == ResultCounts(passed=1, failed=1, errored=0)
        assert report.exit_code == 1
        assert sink.getvalue().splitlines() == [
            ": Passed",
            ": Failed: x≠y",
            "2 tests run: 1 passed, 1 failed, 0 errored",
        ]

    def test_scenario_b(self, scenario_b: Label) -> None:
        sink = io.StringIO()
        report = run_tree(scenario_b, sink=sink)

        assert [r.name for r in report.results] == ["Suite/t1", "Suite/t2"]
        assert report.counts == ResultCounts(passed=1, failed=0, errored=1)
        assert report.exit_code == 2
        assert sink.getvalue().splitlines() == [
            "Suite/t1: Exception: ValueError: boom",
            "Suite/t2: Passed",
            "2 tests run: 1 passed, 0 failed, 1 errored",
        ]

    def test_scenario_c_empty_tree(self) -> None:
        sink = io.StringIO()
        assert run(TestList(), sink=sink) == 0
        assert run_parallel(TestList(), sink=io.StringIO()) == 0
        assert sink.getvalue() == "0 tests run: 0 passed, 0 failed, 0 errored\n"

    def test_scenario_d_parallel_matches_sequential(self, half_failing_suite: Label) -> None:
        sequential = run_tree(half_failing_suite, sink=io.StringIO())
        sink = OverlapDetectingSink()
        parallel = run_tree(half_failing_suite, parallel=True, sink=sink, max_workers=8)

        assert parallel.counts == sequential.counts == ResultCounts(passed=50, failed=50, errored=0)
        assert parallel.exit_code == sequential.exit_code == 1
        assert sink.overlaps == 0
        # 100 notification lines plus the summary, each written whole.
        assert len(sink.lines) == 101
        assert all(line.endswith("\n") and line.count("\n") == 1 for line in sink.lines)
        assert sink.lines[-1] == "100 tests run: 50 passed, 50 failed, 0 errored\n"


class TestEntryPoints:
    def test_run_returns_exit_code(self, scenario_b: Label) -> None:
        assert run(scenario_b, sink=io.StringIO()) == 2

    def test_run_parallel_returns_exit_code(self, scenario_b: Label) -> None:
        assert run_parallel(scenario_b, sink=io.StringIO(), max_workers=2) == 2

    def test_runs_are_idempotent(self, half_failing_suite: Label) -> None:
        first = run_tree(half_failing_suite, sink=io.StringIO())
        second = run_tree(half_failing_suite, sink=io.StringIO())
        assert first.counts == second.counts

    def test_custom_notifier_replaces_console_output(
        self, scenario_b: Label, recorder: RecordingNotifier
    ) -> None:
        sink = io.StringIO()
        run(scenario_b, sink=sink, notifier=recorder)
        assert sink.getvalue() == "2 tests run: 1 passed, 0 failed, 1 errored\n"
        assert recorder.names("before_run") == ["Suite/t1", "Suite/t2"]

    def test_summary_defaults_to_stdout(self, capsys) -> None:
        run(Label("only", Case(passing)))
        assert capsys.readouterr().out.splitlines() == [
            "only: Passed",
            "1 tests run: 1 passed, 0 failed, 0 errored",
        ]

    def test_harness_fault_aborts_run(self) -> None:
        def explode(name: str) -> None:
            raise RuntimeError("logger unavailable")

        sink = io.StringIO()
        with pytest.raises(HarnessError):
            run(Label("t", Case(raising)), sink=sink, notifier=CallbackNotifier(before_run=explode))
        assert sink.getvalue() == ""

    def test_run_with_config_selects_mode(self, scenario_a: TestList) -> None:
        assert run_with_config(scenario_a, RunnerConfig(), sink=io.StringIO()) == 1
        assert run_with_config(
            scenario_a, RunnerConfig(parallel=True, max_workers=2), sink=io.StringIO()
        ) == 1
