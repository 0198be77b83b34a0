"""
Parsing engine for CMake console output.

This module provides the incremental parser, its pattern tables and the
location extractor.
"""

from .patterns import (
    ADJACENT_START_PATTERN,
    CLASSIFICATIONS,
    LOCATION_PATTERNS,
    MESSAGE_START_PATTERN,
    START_MARKERS,
    classify,
)
from .location import extract_location
from .stream import CMakeErrorParser

__all__ = [
    "ADJACENT_START_PATTERN",
    "CLASSIFICATIONS",
    "LOCATION_PATTERNS",
    "MESSAGE_START_PATTERN",
    "START_MARKERS",
    "classify",
    "extract_location",
    "CMakeErrorParser",
]
