"""
Diagnostic emitters.

This module provides the emitter protocol and the in-memory diagnostic store.
"""

from .base import DiagnosticEmitter, TextSink
from .store import PROBLEM_MARKER_ID, DiagnosticStore, target_name

__all__ = [
    "DiagnosticEmitter",
    "TextSink",
    "DiagnosticStore",
    "PROBLEM_MARKER_ID",
    "target_name",
]
