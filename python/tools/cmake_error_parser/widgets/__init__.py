"""
Widget modules for the CMake error parser.

This module provides widgets for processing, formatting, and managing parsed
diagnostics.
"""

from .formatter import ConsoleFormatterWidget
from .processor import CMakeProcessorWidget, extract_version
from .main_widget import CMakeParserWidget

__all__ = [
    'ConsoleFormatterWidget',
    'CMakeProcessorWidget',
    'CMakeParserWidget',
    'extract_version',
]
