# src/trellis/tree.py

"""
Immutable test tree model.

A suite is a tree of three node kinds: `Case` leaves holding test code,
`TestList` nodes holding ordered children, and `Label` nodes naming a single
child. Trees are attrs frozen values; nothing mutates them after construction.
"""

from collections.abc import Callable
from typing import Any, TypeAlias, Union

from attrs import define, field


def _validate_callable(inst: Any, attr: Any, value: Any) -> None:
    """Validator ensures the leaf holds something that can be called."""
    if not callable(value):
        raise TypeError(f"Field '{attr.name}' must be callable, got {type(value).__name__}")


def _validate_children(inst: Any, attr: Any, value: tuple) -> None:
    """Validator ensures every child of a list is itself a test tree."""
    for child in value:
        if not isinstance(child, (Case, TestList, Label)):
            raise TypeError(f"TestList children must be test trees, got {type(child).__name__}")


def _validate_child(inst: Any, attr: Any, value: Any) -> None:
    if not isinstance(value, (Case, TestList, Label)):
        raise TypeError(f"Label child must be a test tree, got {type(value).__name__}")


def _validate_name(inst: Any, attr: Any, value: Any) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Label name must be a string, got {type(value).__name__}")


class _TreeOps:
    """Combinators shared by all tree nodes."""

    __slots__ = ()

    def with_label(self, name: str) -> "Label":
        """Wrap this tree in a `Label`."""
        return Label(name, self)

    def add(self, other: Union["Test", Callable]) -> "TestList":
        """Return a list holding this tree followed by `other`."""
        return TestList((self, _as_tree(other)))


@define(frozen=True, slots=True)
class Case(_TreeOps):
    """Leaf node holding zero-argument test code."""

    __test__ = False

    code: Callable = field(validator=_validate_callable)


@define(frozen=True, slots=True)
class TestList(_TreeOps):
    """Ordered sequence of child trees. Children share their parent's prefix."""

    __test__ = False

    children: tuple = field(factory=tuple, converter=tuple, validator=_validate_children)


@define(frozen=True, slots=True)
class Label(_TreeOps):
    """Names a single child tree with one path segment."""

    __test__ = False

    name: str = field(validator=_validate_name)
    child: "Test" = field(validator=_validate_child)


Test: TypeAlias = Case | TestList | Label


def _as_tree(item: Any) -> Test:
    if isinstance(item, (Case, TestList, Label)):
        return item
    return Case(item)


def case(code: Callable) -> Case:
    return Case(code)


def suite(*items: Test | Callable) -> TestList:
    """Build a `TestList`, wrapping bare callables into `Case` leaves."""
    return TestList(_as_tree(item) for item in items)


def label(name: str, tree: Test | Callable) -> Label:
    return Label(name, _as_tree(tree))


def count_cases(tree: Test) -> int:
    """Number of `Case` leaves in `tree`."""
    match tree:
        case Case():
            return 1
        case Label(child=child):
            return count_cases(child)
        case TestList(children=children):
            return sum(count_cases(c) for c in children)
    raise TypeError(f"Not a test tree: {type(tree).__name__}")


# 🔼⚙️
