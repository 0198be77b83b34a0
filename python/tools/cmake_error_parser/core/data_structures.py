"""
Data structures for the CMake error parser.

This module contains the records that flow from the parser to the diagnostic
store, and the immutable entries of the pattern tables.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import MessageKind, MessageSeverity


@dataclass(frozen=True)
class StartMarker:
    """A start-of-message marker recognized at the beginning of a line."""

    token: str
    kind: MessageKind
    severity: Optional[MessageSeverity] = None
    pattern: Optional[str] = None

    @property
    def regex(self) -> str:
        """Regular expression source matching this marker."""
        return self.pattern if self.pattern is not None else re.escape(self.token)

    @property
    def is_diagnostic(self) -> bool:
        """Whether messages started by this marker become diagnostics."""
        return self.severity is not None


@dataclass(frozen=True)
class LocationPattern:
    """A named pattern with optional ``file`` and ``line`` capture groups."""

    name: str
    regex: "re.Pattern[str]"

    @property
    def captures_file(self) -> bool:
        return "file" in self.regex.groupindex

    @property
    def captures_line(self) -> bool:
        return "line" in self.regex.groupindex


@dataclass(frozen=True)
class Location:
    """File and line a message refers to; both parts may be absent."""

    file: Optional[str] = None
    line: Optional[int] = None
    pattern: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.pattern is not None


@dataclass(frozen=True)
class DiagnosticMessage:
    """One complete, classified message cut out of the console stream."""

    classification: str
    severity: MessageSeverity
    kind: MessageKind
    full_text: str
    body: str
    file: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the DiagnosticMessage to a dictionary."""
        return {
            "classification": self.classification,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "file": self.file,
            "line": self.line,
            "message": self.full_text,
            "body": self.body,
        }


@dataclass
class Diagnostic:
    """A problem annotation recorded by a diagnostic store."""

    target: str
    message: str
    severity: MessageSeverity
    kind: MessageKind
    file: Optional[str] = None
    line: Optional[int] = None
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Diagnostic to a dictionary."""
        result: Dict[str, Any] = {
            "target": self.target,
            "file": self.file,
            "line": self.line,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.source is not None:
            result["source"] = self.source
        return result


@dataclass
class DiagnosticReport:
    """Data class representing all diagnostics recorded for one target."""

    target: str
    generator_version: str = "unknown"
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic to the report."""
        self.diagnostics.append(diagnostic)

    def get_by_severity(self, severity: MessageSeverity) -> List[Diagnostic]:
        """Get all diagnostics with the specified severity."""
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> List[Diagnostic]:
        """Get all error diagnostics."""
        return self.get_by_severity(MessageSeverity.ERROR)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get all warning diagnostics."""
        return self.get_by_severity(MessageSeverity.WARNING)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the DiagnosticReport to a dictionary."""
        return {
            "target": self.target,
            "generator_version": self.generator_version,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
