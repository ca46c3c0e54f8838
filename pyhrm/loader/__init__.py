"""Loaders for scripts and floor presets."""

from __future__ import annotations

from .memory_preset import (
    MemoryPresetFormatError,
    load_memory_preset,
    load_memory_preset_from_path,
    parse_memory_preset,
)
from .script_text import (
    ScriptFormatError,
    load_script,
    load_script_from_path,
    load_script_lines,
    parse_instruction,
)

__all__ = [
    "MemoryPresetFormatError",
    "ScriptFormatError",
    "load_memory_preset",
    "load_memory_preset_from_path",
    "load_script",
    "load_script_from_path",
    "load_script_lines",
    "parse_instruction",
    "parse_memory_preset",
]
