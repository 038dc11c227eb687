#
# src/trellis/telemetry/__init__.py
#
"""
Logging setup for trellis.
"""
from .logger import StructLogger, setup_logging

__all__ = [
    "StructLogger",
    "setup_logging",
]

# 🔼⚙️
