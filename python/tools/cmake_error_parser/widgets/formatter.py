"""
Console formatter widget.

This module provides functionality to format diagnostic reports for console
display with colorized output based on diagnostic severity.
"""

from termcolor import colored

from ..core.data_structures import Diagnostic, DiagnosticReport
from ..core.enums import MessageSeverity


class ConsoleFormatterWidget:
    """Widget for formatting diagnostic reports for console display."""

    def __init__(self):
        """Initialize the console formatter widget."""
        self.color_map = {
            MessageSeverity.ERROR: "red",
            MessageSeverity.WARNING: "yellow",
        }

        self.prefix_map = {
            MessageSeverity.ERROR: "ERROR",
            MessageSeverity.WARNING: "WARNING",
        }

    def format_summary(self, report: DiagnosticReport) -> str:
        """Format a summary of a diagnostic report."""
        lines = [
            "\nCMake Diagnostics Summary:",
            f"Target: {report.target}",
            f"Version: {report.generator_version}",
            f"Total Diagnostics: {len(report.diagnostics)}",
            f"Errors: {len(report.errors)}",
            f"Warnings: {len(report.warnings)}",
        ]
        return "\n".join(lines)

    def _plain_message(self, diagnostic: Diagnostic) -> str:
        prefix = self.prefix_map.get(diagnostic.severity, "UNKNOWN")

        location = diagnostic.file or diagnostic.target
        if diagnostic.line is not None:
            location += f":{diagnostic.line}"

        # first line only, the rest is the indented message text
        headline = diagnostic.message.splitlines()[0] if diagnostic.message else ""
        return f"{prefix}: {location} [{diagnostic.kind.value}] - {headline}"

    def format_message(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic with color."""
        color = self.color_map.get(diagnostic.severity, "white")
        return colored(self._plain_message(diagnostic), color)

    def colorize_output(self, report: DiagnosticReport) -> None:
        """Print a report with colorized formatting based on severity."""
        print(self.format_summary(report))
        print("\nDiagnostics:")

        for diagnostic in report.diagnostics:
            print(self.format_message(diagnostic))

    def get_formatted_output(self, report: DiagnosticReport) -> str:
        """Get formatted output as a string without colors."""
        lines = [self.format_summary(report), "\nDiagnostics:"]
        lines.extend(self._plain_message(d) for d in report.diagnostics)
        return "\n".join(lines)
