#
# config/__init__.py
#
"""
Configuration handling sub-package for trellis.

Exports the loading function and core configuration models.
"""

from .loader import load_config
from .models import GlobalConfig, RunnerConfig, TrellisConfig

__all__ = [
    "GlobalConfig",
    "RunnerConfig",
    "TrellisConfig",
    "load_config",
]

# 🔼⚙️
