"""
In-memory diagnostic store.

This module provides the default diagnostic emitter. It keeps the diagnostics
of each target until they are reset before the next run.
"""

from collections import OrderedDict
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from loguru import logger

from ..core.data_structures import Diagnostic, DiagnosticReport
from ..core.enums import MessageKind, MessageSeverity
from ..core.errors import DiagnosticCreationError

PROBLEM_MARKER_ID = "cmake_error_parser.problem"


def target_name(root: Any) -> str:
    """Name under which diagnostics of ``root`` are stored."""
    if root is None:
        return "project"
    if isinstance(root, PurePath):
        return root.as_posix()
    return str(root)


class DiagnosticStore:
    """Diagnostic emitter that records diagnostics per target."""

    def __init__(self, marker_id: str = PROBLEM_MARKER_ID):
        self.marker_id = marker_id
        self._diagnostics: Dict[str, List[Diagnostic]] = OrderedDict()

    def create_diagnostic(
        self,
        root: Any,
        file_path: Optional[str],
        severity: MessageSeverity,
        kind: MessageKind,
        message: str,
        line: Optional[int],
    ) -> Diagnostic:
        """Record a diagnostic for the target ``root``."""
        target = target_name(root)
        if line is not None and line < 0:
            raise DiagnosticCreationError(
                f"Invalid line number {line}", target=target, file_path=file_path
            )
        if not isinstance(severity, MessageSeverity):
            raise DiagnosticCreationError(
                f"Invalid severity {severity!r}", target=target, file_path=file_path
            )

        diagnostic = Diagnostic(
            target=target,
            message=message,
            severity=severity,
            kind=kind,
            file=file_path,
            line=line,
            source=self.marker_id,
        )
        self._diagnostics.setdefault(target, []).append(diagnostic)
        return diagnostic

    def reset_diagnostics(self, target: Any) -> int:
        """Remove all diagnostics of ``target`` and return how many there were."""
        removed = self._diagnostics.pop(target_name(target), [])
        if removed:
            logger.debug(f"Removed {len(removed)} diagnostics of {target_name(target)}")
        return len(removed)

    def diagnostics(self, target: Any = None) -> List[Diagnostic]:
        """All diagnostics, or only those of ``target`` when given."""
        if target is not None:
            return list(self._diagnostics.get(target_name(target), []))
        return [d for records in self._diagnostics.values() for d in records]

    def targets(self) -> List[str]:
        return list(self._diagnostics)

    def report(self, target: Any = None, generator_version: str = "unknown") -> DiagnosticReport:
        """Build a report of the diagnostics of ``target``."""
        return DiagnosticReport(
            target=target_name(target),
            generator_version=generator_version,
            diagnostics=self.diagnostics(target if target is not None else "project"),
        )

    def __len__(self) -> int:
        return sum(len(records) for records in self._diagnostics.values())
