"""
Base writer interface.

This module defines the protocol that all output writers must implement.
"""

from typing import Protocol
from pathlib import Path
from ..core.data_structures import DiagnosticReport


class OutputWriter(Protocol):
    """Protocol defining interface for output writers."""

    def write(self, report: DiagnosticReport, output_path: Path) -> None:
        """Write the diagnostic report to the specified path."""
        ...
