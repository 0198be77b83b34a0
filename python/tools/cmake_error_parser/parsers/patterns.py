"""
Pattern tables for CMake console output.

The start-of-message markers are the preambles CMake prints in front of each
message (see ``cmMessenger.cxx#printMessagePreamble``), plus the status prefix
and the empty line that end a message without starting a new diagnostic.
Both tables are built once at import and must not be modified.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..core.data_structures import LocationPattern, StartMarker
from ..core.enums import MessageKind, MessageSeverity

# Longer literals come before their own prefixes.
START_MARKERS: Tuple[StartMarker, ...] = (
    StartMarker(
        "CMake Deprecation Error",
        MessageKind.DEPRECATION_ERROR,
        MessageSeverity.ERROR,
    ),
    StartMarker(
        "CMake Deprecation Warning",
        MessageKind.DEPRECATION_WARNING,
        MessageSeverity.WARNING,
    ),
    StartMarker("CMake Error (dev)", MessageKind.AUTHOR_ERROR, MessageSeverity.ERROR),
    StartMarker("CMake Error", MessageKind.ERROR, MessageSeverity.ERROR),
    StartMarker(
        "CMake Internal Error (please report a bug)",
        MessageKind.INTERNAL_ERROR,
        MessageSeverity.ERROR,
    ),
    StartMarker("CMake Debug Log", MessageKind.LOG),
    StartMarker(
        "CMake Warning (dev)", MessageKind.AUTHOR_WARNING, MessageSeverity.WARNING
    ),
    StartMarker("CMake Warning", MessageKind.WARNING, MessageSeverity.WARNING),
    StartMarker("--", MessageKind.STATUS),
    # terminates the output of a plain message("...") call
    StartMarker("", MessageKind.BLANK, pattern=r"\r?\n"),
)

MESSAGE_START_PATTERN = re.compile(
    "^(?:" + "|".join(f"({marker.regex})" for marker in START_MARKERS) + ")",
    re.MULTILINE,
)

CLASSIFICATIONS: Mapping[str, StartMarker] = MappingProxyType(
    {marker.token: marker for marker in START_MARKERS if marker.is_diagnostic}
)

# A diagnostic marker directly after the previous marker, with an empty body
# in between, starts a new message even though it is not at a line start.
ADJACENT_START_PATTERN = re.compile(
    "|".join(marker.regex for marker in START_MARKERS if marker.is_diagnostic)
)

LOCATION_PATTERNS: Tuple[LocationPattern, ...] = (
    LocationPattern(
        "at", re.compile(r"^ at (?P<file>.+):(?P<line>\d+).*$", re.MULTILINE)
    ),
    LocationPattern(
        "in", re.compile(r"^ in (?P<file>.+):(?P<line>\d+).*$", re.MULTILINE)
    ),
    LocationPattern("in-file", re.compile(r"^ in (?P<file>.+):\s*$", re.MULTILINE)),
    LocationPattern("project", re.compile(r"^:\s.+$", re.MULTILINE)),
)


def marker_for_match(match: "re.Match[str]") -> StartMarker:
    """Return the marker whose alternative produced ``match``."""
    return START_MARKERS[match.lastindex - 1]


def classify(token: str) -> Optional[StartMarker]:
    """
    Map a matched start-marker token to its classification.

    Returns ``None`` for markers that only terminate a message (status lines,
    debug log output, empty lines) and for any unknown text; such messages
    are dropped.
    """
    return CLASSIFICATIONS.get(token)
