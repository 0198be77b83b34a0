"""
CMake processor widget.

This module provides functionality to run CMake console output from strings,
files and live processes through the incremental parser, with filtering and
statistics generation.
"""

import re
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Union

from loguru import logger

from ..core.data_structures import DiagnosticReport
from ..core.enums import MessageKind, MessageSeverity
from ..emitters.base import TextSink
from ..emitters.store import DiagnosticStore
from ..parsers.stream import CMakeErrorParser
from ..utils.config import ParserConfig
from ..utils.runner import CMakeRunner

VERSION_PATTERN = re.compile(r"cmake version (\d+\.\d+\.\d+)")
VERSION_SEARCH_LIMIT = 4096


def extract_version(output: str) -> str:
    """Extract the CMake version from output, if it was printed."""
    if version_match := VERSION_PATTERN.search(output):
        return version_match.group(1)
    return "unknown"


class CMakeProcessorWidget:
    """Widget for processing CMake console output."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        store: Optional[DiagnosticStore] = None,
        sink: Optional[TextSink] = None,
    ):
        """Initialize the processor widget with optional configuration."""
        self.config = config or ParserConfig()
        self.store = store or DiagnosticStore()
        self.sink = sink

    def _new_parser(self, target: str) -> CMakeErrorParser:
        self.store.reset_diagnostics(target)
        return CMakeErrorParser(
            self.store, root=target, sink=self.sink, encoding=self.config.encoding
        )

    def process_string(
        self,
        output: str,
        target: Optional[str] = None,
        chunk_size: Optional[int] = None,
    ) -> DiagnosticReport:
        """Process a string containing CMake output, optionally in chunks."""
        target = target or self.config.target
        with self._new_parser(target) as parser:
            if chunk_size:
                for start in range(0, len(output), chunk_size):
                    parser.feed(output[start:start + chunk_size])
            else:
                parser.feed(output)

        return self.store.report(target, extract_version(output))

    def process_stream(
        self, stream: BinaryIO, target: Optional[str] = None
    ) -> DiagnosticReport:
        """Process a binary stream of CMake output, reading it chunk by chunk."""
        target = target or self.config.target
        version = "unknown"
        head = b""
        with self._new_parser(target) as parser:
            for chunk in iter(lambda: stream.read(self.config.chunk_size), b""):
                parser.feed(chunk)
                # the version banner, if any, comes first
                if version == "unknown" and len(head) < VERSION_SEARCH_LIMIT:
                    head += chunk
                    version = extract_version(
                        head.decode(self.config.encoding, errors="replace")
                    )

        return self.store.report(target, version)

    def process_file(
        self, file_path: Union[str, Path], target: Optional[str] = None
    ) -> DiagnosticReport:
        """Process a file containing CMake output."""
        file_path = Path(file_path)
        logger.info(f"Processing file: {file_path}")

        try:
            with file_path.open("rb") as file:
                return self.process_stream(file, target)
        except FileNotFoundError:
            logger.error(f"File not found: {file_path}")
            raise

    def process_command(
        self, args: Sequence[str], target: Optional[str] = None
    ) -> DiagnosticReport:
        """Run CMake with ``args`` and process its output as it arrives."""
        runner = CMakeRunner(self.store, self.config, self.sink)
        return runner.run(args, target).report

    def filter_diagnostics(
        self,
        report: DiagnosticReport,
        severities: Optional[List[MessageSeverity]] = None,
        kinds: Optional[List[MessageKind]] = None,
        file_pattern: Optional[str] = None,
    ) -> DiagnosticReport:
        """Filter diagnostics by severity, kind and/or file pattern."""
        if not severities and not kinds and not file_pattern:
            return report

        filtered = DiagnosticReport(
            target=report.target, generator_version=report.generator_version
        )

        for diagnostic in report.diagnostics:
            severity_match = not severities or diagnostic.severity in severities
            kind_match = not kinds or diagnostic.kind in kinds
            # diagnostics of the project itself have no file
            file_match = not file_pattern or (
                diagnostic.file is not None and re.search(file_pattern, diagnostic.file)
            )

            if severity_match and kind_match and file_match:
                filtered.add_diagnostic(diagnostic)

        return filtered

    def combine_reports(
        self, reports: List[DiagnosticReport]
    ) -> Optional[DiagnosticReport]:
        """Combine multiple reports into a single report."""
        if not reports:
            return None

        combined = DiagnosticReport(
            target=reports[0].target, generator_version=reports[0].generator_version
        )
        for report in reports:
            for diagnostic in report.diagnostics:
                combined.add_diagnostic(diagnostic)

        return combined

    def generate_statistics(self, reports: List[DiagnosticReport]) -> Dict[str, Any]:
        """Generate statistics from a list of reports."""
        stats: Dict[str, Any] = {
            "total_reports": len(reports),
            "total_diagnostics": 0,
            "by_severity": {severity.value: 0 for severity in MessageSeverity},
            "by_kind": {},
            "by_file": {},
            "reports_with_errors": 0,
        }

        for report in reports:
            stats["total_diagnostics"] += len(report.diagnostics)
            if report.errors:
                stats["reports_with_errors"] += 1

            for diagnostic in report.diagnostics:
                stats["by_severity"][diagnostic.severity.value] += 1
                kind = diagnostic.kind.value
                stats["by_kind"][kind] = stats["by_kind"].get(kind, 0) + 1
                file_name = diagnostic.file or "<project>"
                stats["by_file"][file_name] = stats["by_file"].get(file_name, 0) + 1

        return stats
