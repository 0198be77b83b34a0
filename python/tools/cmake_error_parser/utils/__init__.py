"""
Utility modules for the CMake error parser.

This module provides configuration, logging setup and the CMake runner. The
command-line interface lives in :mod:`.cli`.
"""

from .config import ParserConfig
from .logging_config import setup_logging
from .runner import CMakeRunner, RunResult

__all__ = [
    "ParserConfig",
    "setup_logging",
    "CMakeRunner",
    "RunResult",
]
