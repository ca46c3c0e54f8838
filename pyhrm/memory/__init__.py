"""Floor tile memory for the interpreter."""

from .floor import (
    EmptyTileError,
    Memory,
    MemoryAccessError,
    NegativeAddressError,
    NoValueAtPointerError,
    NotANumberError,
    OutOfBoundsError,
)

__all__ = [
    "EmptyTileError",
    "Memory",
    "MemoryAccessError",
    "NegativeAddressError",
    "NoValueAtPointerError",
    "NotANumberError",
    "OutOfBoundsError",
]
