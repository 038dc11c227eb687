# src/trellis/discovery.py
"""
Builds test trees from Python modules and classes.

Two mechanisms are supported and can be mixed:

* explicit registration with the `register` decorator, and
* naming conventions: zero-argument functions named `test_*` or `check_*`,
  classes named `Test*` or `Check*`, and module-level test tree values.

Discovery only produces a tree; it never runs anything.
"""
import importlib
import inspect
from collections.abc import Callable, Iterable
from types import ModuleType
from typing import Any

import structlog

from trellis.exceptions import DiscoveryError
from trellis.telemetry import StructLogger
from trellis.tree import Case, Label, Test, TestList

log: StructLogger = structlog.get_logger("discovery")

REGISTERED_ATTR = "__trellis_case__"
FUNCTION_PREFIXES = ("test_", "check_")
CLASS_PREFIXES = ("Test", "Check")


def register(fn: Callable | None = None, *, name: str | None = None):
    """
    Mark a zero-argument function as a test case.

    Usable bare (`@register`) or with a label (`@register(name="...")`). The
    function is returned unchanged.
    """
    def mark(func: Callable) -> Callable:
        setattr(func, REGISTERED_ATTR, name or func.__name__)
        return func

    if fn is not None:
        return mark(fn)
    return mark


def _takes_no_arguments(func: Callable) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in signature.parameters.values()
    )


def _case_name(func: Callable, attr_name: str) -> str | None:
    """The label for an eligible function, or None if it is not a test."""
    registered = getattr(func, REGISTERED_ATTR, None)
    if registered is None and not attr_name.startswith(FUNCTION_PREFIXES):
        return None
    if not _takes_no_arguments(func):
        log.debug("Skipping function with required parameters", function=attr_name)
        return None
    return registered or attr_name


def from_function(fn: Callable, name: str | None = None) -> Label:
    return Label(name or getattr(fn, REGISTERED_ATTR, None) or fn.__name__, Case(fn))


def from_class(cls: type) -> Label:
    """
    Collect the eligible static functions of `cls`, in definition order.

    Only static methods and plain functions stored on the class are
    considered; the class is never instantiated.
    """
    children: list[Test] = []
    for attr_name, raw in vars(cls).items():
        if isinstance(raw, staticmethod):
            func = raw.__func__
        elif inspect.isfunction(raw) and not _has_self(raw):
            func = raw
        else:
            continue
        name = _case_name(func, attr_name)
        if name is not None:
            children.append(Label(name, Case(func)))
    return Label(cls.__name__, TestList(children))


def _has_self(func: Callable) -> bool:
    params = list(inspect.signature(func).parameters)
    return bool(params) and params[0] in ("self", "cls")


def _module_items(module: ModuleType) -> Iterable[tuple[str, Any]]:
    for attr_name, value in vars(module).items():
        if attr_name.startswith("_"):
            continue
        yield attr_name, value


def from_module(module: ModuleType) -> Label:
    """
    Build a tree from `module`, labelled with the module's name.

    Children appear in the order the module defines them.
    """
    children: list[Test] = []
    for attr_name, value in _module_items(module):
        if isinstance(value, (Case, TestList, Label)):
            children.append(Label(attr_name, value))
        elif inspect.isfunction(value) and value.__module__ == module.__name__:
            name = _case_name(value, attr_name)
            if name is not None:
                children.append(Label(name, Case(value)))
        elif (
            inspect.isclass(value)
            and value.__module__ == module.__name__
            and attr_name.startswith(CLASS_PREFIXES)
        ):
            children.append(from_class(value))

    log.debug("Discovered module", module=module.__name__, entries=len(children), emoji_key="discover")
    return Label(module.__name__, TestList(children))


def import_module(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as e:
        log.error("Failed to import test module", module=module_name, error=str(e))
        raise DiscoveryError("Could not import module", module=module_name, details=e) from e


def from_modules(module_names: Iterable[str]) -> TestList:
    """Import each module by dotted name and discover its tests."""
    return TestList(from_module(import_module(name)) for name in module_names)


# 🔼⚙️
