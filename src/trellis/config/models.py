#
# config/models.py
#
"""
Attrs-based data models for trellis configuration structure.
"""

import logging
from typing import Any

from attrs import define, field, validators


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging.getLevelNamesMapping().keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_optional_positive_int(inst: Any, attr: Any, value: int | None) -> None:
    """Validator ensures integer is positive when set."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


def _to_module_tuple(value: Any) -> tuple:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _validate_module_names(inst: Any, attr: Any, value: tuple) -> None:
    for name in value:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Field '{attr.name}' must contain module names, got {name!r}")


@define(frozen=True, slots=True)
class RunnerConfig:
    """How a suite is executed."""
    parallel: bool = field(default=False, validator=validators.instance_of(bool))
    max_workers: int | None = field(default=None, validator=_validate_optional_positive_int)
    modules: tuple[str, ...] = field(factory=tuple, converter=_to_module_tuple, validator=_validate_module_names)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for trellis."""
    log_level: str = field(default="INFO", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level.upper()]


@define(frozen=True, slots=True)
class TrellisConfig:
    """Root configuration object for the trellis application."""
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    runner: RunnerConfig = field(factory=RunnerConfig)


# 🔼⚙️
