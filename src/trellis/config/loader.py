#
# config/loader.py
#
"""
Loads trellis configuration from TOML and applies environment overrides.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from trellis.config.models import GlobalConfig, RunnerConfig, TrellisConfig
from trellis.exceptions import ConfigurationError
from trellis.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

ENV_LOG_LEVEL = "TRELLIS_LOG_LEVEL"
ENV_PARALLEL = "TRELLIS_PARALLEL"
ENV_MAX_WORKERS = "TRELLIS_MAX_WORKERS"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"Environment variable {name} must be a boolean, got '{raw}'")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"Environment variable {name} must be an integer, got '{raw}'") from e


def _read_toml(config_path: Path) -> dict[str, Any]:
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: '{config_path}'") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{config_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration file '{config_path}': {e}") from e


def _table(data: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"'[{key}]' must be a table, got {type(value).__name__}")
    return dict(value)


def _build(cls: type, values: Mapping[str, Any], section: str):
    known = {a.name for a in attrs.fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(f"Unknown key(s) in [{section}]: {', '.join(sorted(unknown))}")
    try:
        return cls(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [{section}] settings: {e}") from e


def _env_overrides(environ: Mapping[str, str]) -> tuple[dict[str, Any], dict[str, Any]]:
    global_values: dict[str, Any] = {}
    runner_values: dict[str, Any] = {}
    if ENV_LOG_LEVEL in environ:
        global_values["log_level"] = environ[ENV_LOG_LEVEL]
    if ENV_PARALLEL in environ:
        runner_values["parallel"] = _parse_bool(ENV_PARALLEL, environ[ENV_PARALLEL])
    if ENV_MAX_WORKERS in environ:
        runner_values["max_workers"] = _parse_int(ENV_MAX_WORKERS, environ[ENV_MAX_WORKERS])
    return global_values, runner_values


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> TrellisConfig:
    """
    Load configuration from `config_path` and the environment.

    With no path, only defaults and environment overrides apply. Environment
    variables take precedence over file values.

    Raises:
        ConfigurationError: the file is missing, unreadable, not valid TOML,
            or holds invalid values.
    """
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    if config_path is not None:
        log.debug("Loading configuration file", path=str(config_path), emoji_key="load")
        data = _read_toml(Path(config_path))

    global_values = _table(data, "global")
    runner_values = _table(data, "runner")
    env_global, env_runner = _env_overrides(environ)
    global_values.update(env_global)
    runner_values.update(env_runner)

    config = TrellisConfig(
        global_config=_build(GlobalConfig, global_values, "global"),
        runner=_build(RunnerConfig, runner_values, "runner"),
    )
    log.debug("Configuration loaded", config=repr(config))
    return config


# 🔼⚙️
