"""
Collaborator interfaces of the parser.

This module defines the protocols for the diagnostic emitter that records
parsed messages and for the optional pass-through text sink.
"""

from typing import Any, Optional, Protocol, Union

from ..core.data_structures import Diagnostic
from ..core.enums import MessageKind, MessageSeverity


class DiagnosticEmitter(Protocol):
    """Protocol defining interface for diagnostic emitters."""

    def create_diagnostic(
        self,
        root: Any,
        file_path: Optional[str],
        severity: MessageSeverity,
        kind: MessageKind,
        message: str,
        line: Optional[int],
    ) -> Diagnostic:
        """Record a diagnostic; ``file_path`` None means the project itself."""
        ...

    def reset_diagnostics(self, target: Any) -> int:
        """Remove all diagnostics previously recorded for ``target``."""
        ...


class TextSink(Protocol):
    """Protocol for the stream receiving raw output verbatim, str or bytes as fed."""

    def write(self, fragment: Union[str, bytes]) -> Any:
        ...
