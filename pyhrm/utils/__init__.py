"""Utility helpers for the interpreter."""

from .debug import debug_enabled, debug_log, reset_categories
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "reset_categories",
    "TraceEntry",
    "TraceRecorder",
]
