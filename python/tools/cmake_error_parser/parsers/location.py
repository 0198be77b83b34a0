"""
Location extraction for CMake diagnostics.

CMake reports the file a message refers to relative to the top-level source
directory, e.g. ``CMake Error at src/CMakeLists.txt:12 (message):``. Messages
without a file refer to the project being built.
"""

from typing import Optional, Sequence

from loguru import logger

from ..core.data_structures import Location, LocationPattern
from .patterns import LOCATION_PATTERNS


def _parse_line(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        line = int(text)
    except ValueError:
        return None
    return line if line >= 0 else None


def extract_location(
    body: str, patterns: Sequence[LocationPattern] = LOCATION_PATTERNS
) -> Location:
    """
    Extract the file and line a message body refers to.

    The patterns are tried in order and the first one that matches anywhere in
    the body wins, even if a later pattern would match as well.

    Args:
        body: Message text without its classification token
        patterns: Location patterns in priority order

    Returns:
        Location with ``file`` and ``line`` set where the matching pattern
        captured them; an empty Location if no pattern matched
    """
    for ptn in patterns:
        match = ptn.regex.search(body)
        if match is None:
            continue

        groups = match.groupdict()
        location = Location(
            file=groups.get("file"),
            line=_parse_line(groups.get("line")),
            pattern=ptn.name,
        )
        logger.trace(f"Location pattern '{ptn.name}' matched: {location}")
        return location

    return Location()
