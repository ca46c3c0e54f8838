"""Opcode metadata and instruction records for Human Resource Machine scripts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping, Union

from .value import AddressExpression


class Opcode(Enum):
    """The closed set of worker commands."""

    IN = auto()
    OUT = auto()
    COPY_FROM = auto()
    COPY_TO = auto()
    ADD = auto()
    SUB = auto()
    BUMP_UP = auto()
    BUMP_DOWN = auto()
    JUMP = auto()
    JUMP_IF_ZERO = auto()
    JUMP_IF_NEGATIVE = auto()


class OperandKind(Enum):
    """What an opcode carries after its mnemonic."""

    NONE = auto()
    ADDRESS = auto()
    LABEL = auto()


@dataclass(frozen=True)
class OpcodeInfo:
    """Metadata describing a single opcode."""

    opcode: Opcode
    mnemonic: str
    operand: OperandKind
    handler: str


def build_opcode_table(entries: Iterable[OpcodeInfo]) -> Mapping[Opcode, OpcodeInfo]:
    """Build the opcode lookup, rejecting duplicates and missing opcodes."""

    table: dict[Opcode, OpcodeInfo] = {}
    for entry in entries:
        if entry.opcode in table:
            raise ValueError(f"opcode {entry.opcode.name} already registered as {table[entry.opcode].mnemonic}")
        table[entry.opcode] = entry
    missing = [opcode.name for opcode in Opcode if opcode not in table]
    if missing:
        raise ValueError(f"opcodes without metadata: {', '.join(missing)}")
    return table


OPCODE_TABLE: Mapping[Opcode, OpcodeInfo] = build_opcode_table(
    (
        OpcodeInfo(Opcode.IN, "INBOX", OperandKind.NONE, "op_inbox"),
        OpcodeInfo(Opcode.OUT, "OUTBOX", OperandKind.NONE, "op_outbox"),
        OpcodeInfo(Opcode.COPY_FROM, "COPYFROM", OperandKind.ADDRESS, "op_copy_from"),
        OpcodeInfo(Opcode.COPY_TO, "COPYTO", OperandKind.ADDRESS, "op_copy_to"),
        OpcodeInfo(Opcode.ADD, "ADD", OperandKind.ADDRESS, "op_add"),
        OpcodeInfo(Opcode.SUB, "SUB", OperandKind.ADDRESS, "op_sub"),
        OpcodeInfo(Opcode.BUMP_UP, "BUMPUP", OperandKind.ADDRESS, "op_bump_up"),
        OpcodeInfo(Opcode.BUMP_DOWN, "BUMPDN", OperandKind.ADDRESS, "op_bump_down"),
        OpcodeInfo(Opcode.JUMP, "JUMP", OperandKind.LABEL, "op_jump"),
        OpcodeInfo(Opcode.JUMP_IF_ZERO, "JUMPZ", OperandKind.LABEL, "op_jump_if_zero"),
        OpcodeInfo(Opcode.JUMP_IF_NEGATIVE, "JUMPN", OperandKind.LABEL, "op_jump_if_negative"),
    )
)

MNEMONICS: Mapping[str, Opcode] = {info.mnemonic: opcode for opcode, info in OPCODE_TABLE.items()}

Operand = Union[AddressExpression, str, None]


@dataclass(frozen=True)
class Instruction:
    """One script line: an opcode plus its address or label operand."""

    opcode: Opcode
    operand: Operand = None

    def __post_init__(self) -> None:
        kind = self.info.operand
        if kind is OperandKind.NONE and self.operand is not None:
            raise ValueError(f"{self.mnemonic} takes no operand")
        if kind is OperandKind.ADDRESS and not isinstance(self.operand, AddressExpression):
            raise ValueError(f"{self.mnemonic} requires a tile address")
        if kind is OperandKind.LABEL and not (isinstance(self.operand, str) and self.operand):
            raise ValueError(f"{self.mnemonic} requires a block label")

    @property
    def info(self) -> OpcodeInfo:
        return OPCODE_TABLE[self.opcode]

    @property
    def mnemonic(self) -> str:
        return self.info.mnemonic

    @property
    def address(self) -> AddressExpression:
        if not isinstance(self.operand, AddressExpression):
            raise AttributeError(f"{self.mnemonic} has no tile address")
        return self.operand

    @property
    def label(self) -> str:
        if self.info.operand is not OperandKind.LABEL:
            raise AttributeError(f"{self.mnemonic} has no block label")
        return self.operand  # type: ignore[return-value]

    def is_jump(self) -> bool:
        return self.info.operand is OperandKind.LABEL

    def __str__(self) -> str:
        if self.operand is None:
            return self.mnemonic
        return f"{self.mnemonic} {self.operand}"
