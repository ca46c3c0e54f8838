"""Loader for Human Resource Machine script text (the game's copy/paste format)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from pyhrm.script import ENTRY_BLOCK, MNEMONICS, OPCODE_TABLE, Instruction, OperandKind, Program, parse_address
from pyhrm.utils import debug_enabled, debug_log


class ScriptFormatError(RuntimeError):
    """Raised when a script line cannot be parsed."""

    def __init__(self, message: str, line_num: int = 0, line_text: str = "") -> None:
        self.line_num = line_num
        self.line_text = line_text
        if line_num:
            message = f"error parsing script on line {line_num}: `{line_text}`: {message}"
        super().__init__(message)


TITLE_PREFIX = "--"
COMMENT_MARKER = "COMMENT"
DEFINE_PREFIX = "DEFINE"


def load_script(text: str) -> Program:
    """Parse script ``text`` into a :class:`Program` (not yet validated)."""

    return load_script_lines(text.splitlines())


def load_script_lines(lines: Iterable[str]) -> Program:
    sections: List[Tuple[str, List[Instruction]]] = [(ENTRY_BLOCK, [])]
    seen = {ENTRY_BLOCK}

    for line_num, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith(TITLE_PREFIX) or COMMENT_MARKER in line:
            continue
        if line.startswith(DEFINE_PREFIX):
            # Drawn comments and labels follow; they carry no instructions.
            break

        if ":" in line:
            label = line.split(":", 1)[0].strip()
            if not label:
                raise ScriptFormatError("empty block label", line_num, line)
            if label in seen:
                raise ScriptFormatError(f"block label {label!r} defined twice", line_num, line)
            seen.add(label)
            sections.append((label, []))
            continue

        try:
            instruction = parse_instruction(line)
        except ValueError as exc:
            raise ScriptFormatError(str(exc), line_num, line) from exc
        sections[-1][1].append(instruction)

    program = Program.build(sections)
    if debug_enabled("loader"):
        for block in program:
            debug_log("loader", "block %d %s: %d instructions", block.index, block.name, len(block))
    return program


def load_script_from_path(path: Path, *, encoding: str = "utf-8") -> Program:
    """Parse the script stored at ``path``."""

    with path.open("r", encoding=encoding) as handle:
        return load_script_lines(handle)


def parse_instruction(line: str) -> Instruction:
    """Parse a single instruction line such as ``COPYTO [3]``."""

    parts = line.split()
    if not parts:
        raise ValueError("empty instruction")
    if len(parts) > 2:
        raise ValueError("instruction line must have at most two parts separated by white spaces")

    mnemonic = parts[0]
    argument = parts[1] if len(parts) == 2 else None
    opcode = MNEMONICS.get(mnemonic)
    if opcode is None:
        raise ValueError(f"invalid instruction {mnemonic!r}")

    kind = OPCODE_TABLE[opcode].operand
    if kind is OperandKind.NONE:
        if argument is not None:
            raise ValueError(f"{mnemonic} takes no argument")
        return Instruction(opcode)
    if argument is None:
        raise ValueError(f"{mnemonic} requires an argument")
    if kind is OperandKind.ADDRESS:
        return Instruction(opcode, parse_address(argument))
    return Instruction(opcode, argument)
