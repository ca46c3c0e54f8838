"""Loader for floor presets given as ``address value`` pairs."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence

from pyhrm.script import Value, parse_value


class MemoryPresetFormatError(RuntimeError):
    """Raised when a memory preset is malformed."""


def parse_memory_preset(tokens: Sequence[str]) -> Dict[int, Value]:
    """Parse a flat ``address value address value ...`` sequence."""

    if len(tokens) % 2 != 0:
        raise MemoryPresetFormatError(
            "invalid memory arguments: expected an even number of arguments (couples of address and value)"
        )

    preset: Dict[int, Value] = {}
    for offset in range(0, len(tokens), 2):
        address_token, value_token = tokens[offset], tokens[offset + 1]
        try:
            address = int(address_token)
        except ValueError as exc:
            raise MemoryPresetFormatError(f"invalid memory address: {address_token}") from exc
        if address < 0:
            raise MemoryPresetFormatError(f"invalid memory address: {address_token}")
        try:
            preset[address] = parse_value(value_token)
        except ValueError as exc:
            raise MemoryPresetFormatError(f"invalid memory value: {value_token}") from exc
    return preset


def load_memory_preset(text: str) -> Dict[int, Value]:
    """Parse preset ``text``; pairs may span lines."""

    return parse_memory_preset(text.split())


def load_memory_preset_from_path(path: Path, *, encoding: str = "utf-8") -> Dict[int, Value]:
    """Parse the preset file stored at ``path``."""

    return load_memory_preset(path.read_text(encoding=encoding))
