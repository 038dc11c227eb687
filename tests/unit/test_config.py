#
# tests/unit/test_config.py
#
"""
Tests for configuration models and the TOML loader.
"""

from pathlib import Path

import pytest

from trellis.config import GlobalConfig, RunnerConfig, TrellisConfig, load_config
from trellis.exceptions import ConfigurationError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "trellis.toml"
    path.write_text(content)
    return path


class TestModels:
    def test_defaults(self) -> None:
        config = TrellisConfig()
        assert config.runner == RunnerConfig(parallel=False, max_workers=None, modules=())
        assert config.global_config.log_level == "INFO"
        assert config.global_config.numeric_log_level == 20

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="log_level"):
            GlobalConfig(log_level="LOUD")

    @pytest.mark.parametrize("workers", [0, -2, True, "4"])
    def test_invalid_max_workers(self, workers) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            RunnerConfig(max_workers=workers)

    def test_modules_become_tuple(self) -> None:
        assert RunnerConfig(modules=["a", "b"]).modules == ("a", "b")


class TestLoadConfig:
    def test_no_path_gives_defaults(self) -> None:
        assert load_config(None, environ={}) == TrellisConfig()

    def test_reads_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
            [global]
            log_level = "debug"

            [runner]
            parallel = true
            max_workers = 3
            modules = ["pkg.one", "pkg.two"]
            """,
        )
        config = load_config(path, environ={})
        assert config.global_config.log_level == "debug"
        assert config.runner == RunnerConfig(parallel=True, max_workers=3, modules=("pkg.one", "pkg.two"))

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[runner]\nparallel = true\nmax_workers = 3\n")
        config = load_config(
            path,
            environ={"TRELLIS_PARALLEL": "no", "TRELLIS_MAX_WORKERS": "6", "TRELLIS_LOG_LEVEL": "ERROR"},
        )
        assert config.runner.parallel is False
        assert config.runner.max_workers == 6
        assert config.global_config.log_level == "ERROR"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.toml", environ={})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[runner\nparallel = "missing bracket')
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_config(path, environ={})

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[runner]\nretries = 3\n")
        with pytest.raises(ConfigurationError, match="retries"):
            load_config(path, environ={})

    def test_wrong_type(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[runner]\nparallel = "yes"\n')
        with pytest.raises(ConfigurationError, match="runner"):
            load_config(path, environ={})

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'runner = "fast"\n')
        with pytest.raises(ConfigurationError, match="table"):
            load_config(path, environ={})

    @pytest.mark.parametrize(
        ("variable", "value"),
        [("TRELLIS_PARALLEL", "maybe"), ("TRELLIS_MAX_WORKERS", "many")],
    )
    def test_bad_environment_values(self, variable: str, value: str) -> None:
        with pytest.raises(ConfigurationError, match=variable):
            load_config(None, environ={variable: value})
