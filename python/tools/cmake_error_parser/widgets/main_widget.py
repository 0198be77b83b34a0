"""
Main CMake parser widget.

This module provides the main widget that orchestrates the entire parsing process,
integrating all the sub-widgets for a complete solution.
"""

import json
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Union

from ..core.data_structures import DiagnosticReport
from ..core.enums import MessageKind, MessageSeverity, OutputFormat
from ..emitters.base import TextSink
from ..emitters.store import DiagnosticStore
from ..utils.config import ParserConfig
from ..writers.factory import WriterFactory
from .formatter import ConsoleFormatterWidget
from .processor import CMakeProcessorWidget


def _to_severities(
    values: Optional[Sequence[Union[MessageSeverity, str]]],
) -> Optional[List[MessageSeverity]]:
    if not values:
        return None
    return [
        MessageSeverity.from_string(v) if isinstance(v, str) else v for v in values
    ]


def _to_kinds(
    values: Optional[Sequence[Union[MessageKind, str]]],
) -> Optional[List[MessageKind]]:
    if not values:
        return None
    return [MessageKind.from_string(v) if isinstance(v, str) else v for v in values]


class CMakeParserWidget:
    """Main widget for orchestrating CMake output parsing and processing."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        store: Optional[DiagnosticStore] = None,
        sink: Optional[TextSink] = None,
    ):
        """Initialize the main parser widget."""
        self.config = config or ParserConfig()
        self.processor = CMakeProcessorWidget(self.config, store, sink)
        self.formatter = ConsoleFormatterWidget()

    @property
    def store(self) -> DiagnosticStore:
        return self.processor.store

    def _filter(
        self,
        report: DiagnosticReport,
        filter_severities: Optional[Sequence[Union[MessageSeverity, str]]],
        filter_kinds: Optional[Sequence[Union[MessageKind, str]]],
        file_pattern: Optional[str],
    ) -> DiagnosticReport:
        return self.processor.filter_diagnostics(
            report,
            severities=_to_severities(filter_severities),
            kinds=_to_kinds(filter_kinds),
            file_pattern=file_pattern,
        )

    def parse_from_string(
        self,
        output: str,
        target: Optional[str] = None,
        filter_severities: Optional[Sequence[Union[MessageSeverity, str]]] = None,
        filter_kinds: Optional[Sequence[Union[MessageKind, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> DiagnosticReport:
        """Parse CMake output from a string."""
        report = self.processor.process_string(output, target)
        return self._filter(report, filter_severities, filter_kinds, file_pattern)

    def parse_from_file(
        self,
        file_path: Union[str, Path],
        target: Optional[str] = None,
        filter_severities: Optional[Sequence[Union[MessageSeverity, str]]] = None,
        filter_kinds: Optional[Sequence[Union[MessageKind, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> DiagnosticReport:
        """Parse CMake output from a file."""
        report = self.processor.process_file(file_path, target)
        return self._filter(report, filter_severities, filter_kinds, file_pattern)

    def parse_from_stream(
        self,
        stream: BinaryIO,
        target: Optional[str] = None,
        filter_severities: Optional[Sequence[Union[MessageSeverity, str]]] = None,
        filter_kinds: Optional[Sequence[Union[MessageKind, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> DiagnosticReport:
        """Parse CMake output from a binary stream such as stdin."""
        report = self.processor.process_stream(stream, target)
        return self._filter(report, filter_severities, filter_kinds, file_pattern)

    def parse_from_command(
        self,
        args: Sequence[str],
        target: Optional[str] = None,
        filter_severities: Optional[Sequence[Union[MessageSeverity, str]]] = None,
        filter_kinds: Optional[Sequence[Union[MessageKind, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> DiagnosticReport:
        """Run CMake and parse its output while it runs."""
        report = self.processor.process_command(args, target)
        return self._filter(report, filter_severities, filter_kinds, file_pattern)

    def write_output(
        self,
        report: DiagnosticReport,
        output_format: Union[OutputFormat, str],
        output_path: Union[str, Path],
    ) -> Path:
        """Write a report to a file in the specified format."""
        return WriterFactory.write_report(report, output_format, output_path)

    def display_output(self, report: DiagnosticReport, colorize: bool = True) -> None:
        """Display a report on the console."""
        if colorize:
            self.formatter.colorize_output(report)
        else:
            print(self.formatter.get_formatted_output(report))

    def generate_statistics(self, reports: List[DiagnosticReport]) -> Dict[str, Any]:
        """Generate statistics from reports."""
        return self.processor.generate_statistics(reports)

    def display_statistics(self, reports: List[DiagnosticReport]) -> None:
        print("\nStatistics:")
        print(json.dumps(self.generate_statistics(reports), indent=4))
