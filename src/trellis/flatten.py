# src/trellis/flatten.py

"""
Flattens a test tree into an ordered list of named, runnable leaves.
"""

from typing import NamedTuple

from trellis.results import TestCode
from trellis.tree import Case, Label, Test, TestList

NAME_SEPARATOR = "/"


class FlatCase(NamedTuple):
    """A leaf's qualified name and its original, unmodified code."""

    name: str
    code: TestCode


def qualify(prefix: str | None, name: str) -> str:
    """Append one label segment to a qualified name. `None` means no label yet."""
    if prefix is None:
        return name
    return f"{prefix}{NAME_SEPARATOR}{name}"


def flatten(tree: Test, prefix: str | None = None) -> list[FlatCase]:
    """
    Depth-first, left-to-right traversal of `tree`.

    Labels extend the prefix for their child; list children all share the
    prefix of the list. A case reached with no enclosing label gets the empty
    string as its name; an empty label is still a segment, so
    `Label("", Label("a", ...))` yields `"/a"`. Duplicate names are kept as
    they are.

    Nothing is executed here, and flattening cannot fail on a well-formed tree.
    """
    flat: list[FlatCase] = []
    _collect(tree, prefix, flat)
    return flat


def _collect(tree: Test, prefix: str | None, out: list[FlatCase]) -> None:
    match tree:
        case Label(name=name, child=child):
            _collect(child, qualify(prefix, name), out)
        case Case(code=code):
            out.append(FlatCase("" if prefix is None else prefix, code))
        case TestList(children=children):
            for child in children:
                _collect(child, prefix, out)
        case _:
            raise TypeError(f"Not a test tree: {type(tree).__name__}")


# 🔼⚙️
