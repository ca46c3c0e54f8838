"""Values carried between the belts, the floor tiles and the worker's hands."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

_ADDRESS = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class Value:
    """Base class for the two kinds of box the worker can hold."""

    def is_number(self) -> bool:
        return isinstance(self, Number)

    def is_character(self) -> bool:
        return isinstance(self, Character)


@dataclass(frozen=True)
class Number(Value):
    """Integer box."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Character(Value):
    """Single character box."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise ValueError(f"character box must hold exactly one character, got {self.value!r}")

    def __str__(self) -> str:
        return self.value

    def alphabetic_index(self) -> int:
        """Offset of the character from ``'A'`` (ASCII letters compare case-insensitively)."""

        char = self.value.upper() if self.value.isascii() else self.value
        return ord(char) - ord("A")


def parse_value(token: str) -> Value:
    """Parse a belt/preset token: an integer, otherwise a single character."""

    text = token.strip()
    try:
        return Number(int(text))
    except ValueError:
        pass
    if len(text) == 1:
        return Character(text)
    raise ValueError(f"invalid value: {token!r}")


class AddressingMode(Enum):
    """How an instruction operand designates a floor tile."""

    DIRECT = auto()
    INDIRECT = auto()


@dataclass(frozen=True)
class AddressExpression:
    """Unresolved tile operand, e.g. ``3`` or ``[3]``."""

    operand: int
    mode: AddressingMode = AddressingMode.DIRECT

    def __post_init__(self) -> None:
        if self.operand < 0:
            raise ValueError(f"tile address must be non-negative, got {self.operand}")

    @property
    def indirect(self) -> bool:
        return self.mode is AddressingMode.INDIRECT

    def __str__(self) -> str:
        if self.indirect:
            return f"[{self.operand}]"
        return str(self.operand)


def direct(operand: int) -> AddressExpression:
    return AddressExpression(operand, AddressingMode.DIRECT)


def indirect(operand: int) -> AddressExpression:
    return AddressExpression(operand, AddressingMode.INDIRECT)


def parse_address(token: str) -> AddressExpression:
    """Parse ``n`` as a direct address and ``[n]`` as an indirect one."""

    text = token.strip()
    mode = AddressingMode.DIRECT
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1].strip()
        mode = AddressingMode.INDIRECT
    if not _ADDRESS.match(text):
        raise ValueError(f"invalid tile address: {token!r}")
    return AddressExpression(int(text), mode)
