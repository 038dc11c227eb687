#
# src/trellis/__init__.py
#
"""
trellis: a small test execution engine.

Suites are labelled trees of test cases. They are flattened into named
leaves, run sequentially or on a worker pool, and reduced to a summary line
and a process exit code.
"""
from .aggregate import ResultCounts, exit_code, sum_results
from .discovery import from_class, from_function, from_module, from_modules, register
from .evaluator import evaluate_parallel, evaluate_sequential, execute_one
from .exceptions import ConfigurationError, DiscoveryError, HarnessError, TrellisError
from .flatten import FlatCase, flatten
from .notifications import CallbackNotifier, ConsoleNotifier, LockedNotifier, Notifier
from .outcomes import CaseResult, Errored, Failed, OutcomeKind, Passed
from .results import (
    Fail,
    Ok,
    all_of,
    assert_equal,
    assert_false,
    assert_raises,
    assert_true,
    fail,
    failf,
    ok,
)
from .runner import RunReport, run, run_parallel, run_tree, run_with_config
from .tree import Case, Label, Test, TestList, case, count_cases, label, suite

__all__ = [
    "CallbackNotifier",
    "Case",
    "CaseResult",
    "ConfigurationError",
    "ConsoleNotifier",
    "DiscoveryError",
    "Errored",
    "Fail",
    "Failed",
    "FlatCase",
    "HarnessError",
    "Label",
    "LockedNotifier",
    "Notifier",
    "Ok",
    "OutcomeKind",
    "Passed",
    "ResultCounts",
    "RunReport",
    "Test",
    "TestList",
    "TrellisError",
    "all_of",
    "assert_equal",
    "assert_false",
    "assert_raises",
    "assert_true",
    "case",
    "count_cases",
    "evaluate_parallel",
    "evaluate_sequential",
    "execute_one",
    "exit_code",
    "fail",
    "failf",
    "flatten",
    "from_class",
    "from_function",
    "from_module",
    "from_modules",
    "label",
    "ok",
    "register",
    "run",
    "run_parallel",
    "run_tree",
    "run_with_config",
    "suite",
    "sum_results",
]

# 🔼⚙️
