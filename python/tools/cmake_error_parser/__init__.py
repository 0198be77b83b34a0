"""
CMake Error Parser

This module extracts diagnostics from the console output of CMake while the
output streams in. Each ``CMake Error``/``CMake Warning``-style message is
classified, its file and line are extracted where CMake reported them, and the
result is recorded as a problem annotation by a diagnostic emitter.

Features:
- Incremental parsing of output fed in fragments of any size
- Classification of all CMake message preambles (errors, warnings, dev and
  deprecation variants)
- First-match location extraction (file relative to the source root, line)
- In-memory diagnostic store with per-target reset
- Export to JSON, CSV and XML, colorized console display
- Live parsing of a running CMake process
"""

from pathlib import Path
from typing import Any, Dict, List, Union

from .core import (
    CMakeParserError,
    ConfigurationError,
    Diagnostic,
    DiagnosticCreationError,
    DiagnosticMessage,
    DiagnosticReport,
    Location,
    MessageKind,
    MessageSeverity,
    OutputFormat,
    ParserState,
    RunnerError,
)
from .parsers import CMakeErrorParser, classify, extract_location
from .emitters import PROBLEM_MARKER_ID, DiagnosticEmitter, DiagnosticStore
from .writers import OutputWriter, WriterFactory
from .widgets import CMakeParserWidget, CMakeProcessorWidget, ConsoleFormatterWidget
from .utils import CMakeRunner, ParserConfig, RunResult, setup_logging
from .utils.cli import main_cli, parse_args

__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"


def parse_cmake_output(output: str, target: str = "project") -> List[Dict[str, Any]]:
    """
    Parse CMake console output and return its diagnostics.

    Args:
        output: The complete console output of a CMake run
        target: Name the diagnostics are recorded under

    Returns:
        List of dictionaries, one per diagnostic, in output order
    """
    report = CMakeParserWidget().parse_from_string(output, target)
    return [d.to_dict() for d in report.diagnostics]


def parse_cmake_file(
    file_path: Union[str, Path], target: str = "project"
) -> List[Dict[str, Any]]:
    """
    Parse a file containing CMake console output and return its diagnostics.

    Args:
        file_path: Path to the file containing the output
        target: Name the diagnostics are recorded under

    Returns:
        List of dictionaries, one per diagnostic, in output order
    """
    report = CMakeParserWidget().parse_from_file(file_path, target)
    return [d.to_dict() for d in report.diagnostics]


__all__ = [
    "CMakeParserError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCreationError",
    "DiagnosticMessage",
    "DiagnosticReport",
    "Location",
    "MessageKind",
    "MessageSeverity",
    "OutputFormat",
    "ParserState",
    "RunnerError",
    "CMakeErrorParser",
    "classify",
    "extract_location",
    "PROBLEM_MARKER_ID",
    "DiagnosticEmitter",
    "DiagnosticStore",
    "OutputWriter",
    "WriterFactory",
    "CMakeParserWidget",
    "CMakeProcessorWidget",
    "ConsoleFormatterWidget",
    "CMakeRunner",
    "ParserConfig",
    "RunResult",
    "setup_logging",
    "main_cli",
    "parse_args",
    "parse_cmake_output",
    "parse_cmake_file",
]
