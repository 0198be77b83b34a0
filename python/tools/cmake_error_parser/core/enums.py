"""
Enums for the CMake error parser.

This module contains all the enumeration types used throughout the parser system.
"""

from enum import Enum, auto


class MessageSeverity(Enum):
    """Enumeration of diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def from_string(cls, severity: str) -> "MessageSeverity":
        """Convert string severity to enum value."""
        normalized = severity.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported severity: {severity}")


class MessageKind(Enum):
    """Kind of a message, derived from its start-of-message marker."""

    DEPRECATION_ERROR = "deprecation-error"
    DEPRECATION_WARNING = "deprecation-warning"
    AUTHOR_ERROR = "author-error"
    AUTHOR_WARNING = "author-warning"
    ERROR = "error"
    INTERNAL_ERROR = "internal-error"
    WARNING = "warning"
    LOG = "log"
    STATUS = "status"
    BLANK = "blank"

    @classmethod
    def from_string(cls, kind: str) -> "MessageKind":
        """Convert string kind to enum value."""
        normalized = kind.strip().lower().replace("_", "-")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported message kind: {kind}")


class ParserState(Enum):
    """States of the incremental message segmenter."""

    SEEKING_FIRST_MESSAGE = auto()
    IN_STREAM = auto()
    FINISHED = auto()


class OutputFormat(Enum):
    """Enumeration of supported output formats."""

    JSON = auto()
    CSV = auto()
    XML = auto()

    @classmethod
    def from_string(cls, format_name: str) -> "OutputFormat":
        """Convert string format name to enum value."""
        name = format_name.upper()
        if name in cls.__members__:
            return cls[name]
        raise ValueError(f"Unsupported output format: {format_name}")
