"""
Core module for the CMake error parser.

This module contains the fundamental data structures, enums and exceptions used
throughout the parser system.
"""

from .enums import MessageKind, MessageSeverity, OutputFormat, ParserState
from .data_structures import (
    Diagnostic,
    DiagnosticMessage,
    DiagnosticReport,
    Location,
    LocationPattern,
    StartMarker,
)
from .errors import (
    CMakeParserError,
    ConfigurationError,
    DiagnosticCreationError,
    ErrorContext,
    RunnerError,
)

__all__ = [
    "MessageKind",
    "MessageSeverity",
    "OutputFormat",
    "ParserState",
    "Diagnostic",
    "DiagnosticMessage",
    "DiagnosticReport",
    "Location",
    "LocationPattern",
    "StartMarker",
    "CMakeParserError",
    "ConfigurationError",
    "DiagnosticCreationError",
    "ErrorContext",
    "RunnerError",
]
