"""
CSV output writer.

This module provides functionality to write diagnostic reports to CSV format.
"""

import csv
from pathlib import Path

from loguru import logger

from ..core.data_structures import DiagnosticReport


class CsvWriter:
    """Writer for CSV output format."""

    fieldnames = ["target", "file", "line", "severity", "kind", "message"]

    def write(self, report: DiagnosticReport, output_path: Path) -> None:
        """Write a diagnostic report to a CSV file, one row per diagnostic."""
        with output_path.open("w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(
                csvfile, fieldnames=self.fieldnames, extrasaction="ignore"
            )
            writer.writeheader()
            writer.writerows(d.to_dict() for d in report.diagnostics)
        logger.info(f"CSV output written to {output_path}")
