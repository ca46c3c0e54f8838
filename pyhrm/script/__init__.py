"""Script object model: values, tile addresses, instructions and blocks."""

from .instruction import MNEMONICS, OPCODE_TABLE, Instruction, Opcode, OpcodeInfo, OperandKind
from .program import ENTRY_BLOCK, Block, InvalidJumpError, Program
from .value import (
    AddressExpression,
    AddressingMode,
    Character,
    Number,
    Value,
    direct,
    indirect,
    parse_address,
    parse_value,
)

__all__ = [
    "AddressExpression",
    "AddressingMode",
    "Block",
    "Character",
    "ENTRY_BLOCK",
    "Instruction",
    "InvalidJumpError",
    "MNEMONICS",
    "Number",
    "OPCODE_TABLE",
    "Opcode",
    "OpcodeInfo",
    "OperandKind",
    "Program",
    "Value",
    "direct",
    "indirect",
    "parse_address",
    "parse_value",
]
