"""Imported by the CLI tests to exercise discovery errors."""

raise RuntimeError("this module cannot be imported")
