"""
JSON output writer.

This module provides functionality to write diagnostic reports to JSON format.
"""

import json
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from ..core.data_structures import DiagnosticReport


class JsonWriter:
    """Writer for JSON output format."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    @staticmethod
    def summary(report: DiagnosticReport) -> Dict[str, Any]:
        return {
            "total": len(report.diagnostics),
            "errors": len(report.errors),
            "warnings": len(report.warnings),
        }

    def write(self, report: DiagnosticReport, output_path: Path) -> None:
        """Write a diagnostic report and its error/warning counts to a JSON file."""
        data = report.to_dict()
        data["summary"] = self.summary(report)
        with output_path.open("w", encoding="utf-8") as json_file:
            json.dump(data, json_file, indent=self.indent, ensure_ascii=False)
        logger.info(
            f"JSON output written to {output_path} "
            f"({data['summary']['total']} diagnostics)"
        )
