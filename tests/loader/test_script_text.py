"""Tests for the script text loader."""

from __future__ import annotations

import pytest

from pyhrm.loader import ScriptFormatError, load_script, load_script_from_path, parse_instruction
from pyhrm.script import Instruction, Opcode, Program, direct, indirect

PAIR_SUM = """-- HUMAN RESOURCE MACHINE PROGRAM --

a:
    INBOX
    COPYTO   0
    INBOX
    ADD      0
    OUTBOX
    JUMP     a


"""


def test_simple_script() -> None:
    program = load_script(PAIR_SUM)

    expected = Program.build(
        [
            ("entry", []),
            (
                "a",
                [
                    Instruction(Opcode.IN),
                    Instruction(Opcode.COPY_TO, direct(0)),
                    Instruction(Opcode.IN),
                    Instruction(Opcode.ADD, direct(0)),
                    Instruction(Opcode.OUT),
                    Instruction(Opcode.JUMP, "a"),
                ],
            ),
        ]
    )
    assert program == expected


def test_instructions_before_first_label_go_to_entry() -> None:
    program = load_script("INBOX\nOUTBOX\nb:\nJUMP b\n")

    entry = program.get_block_by_index(0)
    assert entry is not None
    assert entry.name == "entry"
    assert entry.instructions == (Instruction(Opcode.IN), Instruction(Opcode.OUT))
    assert program.get_block_by_label("b") is program.get_block_by_index(1)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("INBOX", Instruction(Opcode.IN)),
        ("OUTBOX", Instruction(Opcode.OUT)),
        ("COPYFROM 1", Instruction(Opcode.COPY_FROM, direct(1))),
        ("COPYTO 12", Instruction(Opcode.COPY_TO, direct(12))),
        ("ADD 0", Instruction(Opcode.ADD, direct(0))),
        ("SUB 88", Instruction(Opcode.SUB, direct(88))),
        ("BUMPUP 5", Instruction(Opcode.BUMP_UP, direct(5))),
        ("BUMPDN 9", Instruction(Opcode.BUMP_DOWN, direct(9))),
        ("JUMP 0", Instruction(Opcode.JUMP, "0")),
        ("JUMPZ b", Instruction(Opcode.JUMP_IF_ZERO, "b")),
        ("JUMPN cd", Instruction(Opcode.JUMP_IF_NEGATIVE, "cd")),
        (" COPYFROM    0 ", Instruction(Opcode.COPY_FROM, direct(0))),
        ("BUMPDN\n 0 ", Instruction(Opcode.BUMP_DOWN, direct(0))),
        ("COPYFROM [10]", Instruction(Opcode.COPY_FROM, indirect(10))),
        ("ADD [0]", Instruction(Opcode.ADD, indirect(0))),
        ("BUMPDN [9]", Instruction(Opcode.BUMP_DOWN, indirect(9))),
    ],
)
def test_parse_instruction(line: str, expected: Instruction) -> None:
    assert parse_instruction(line) == expected


@pytest.mark.parametrize(
    "line",
    ["JUMP", "INBOX 3", "COPYTO", "COPYTO x", "COPYTO -1", "FLY 3", "ADD 1 2", "inbox"],
)
def test_parse_instruction_rejects_invalid_lines(line: str) -> None:
    with pytest.raises(ValueError):
        parse_instruction(line)


def test_comments_and_define_section_are_skipped() -> None:
    script = """-- HUMAN RESOURCE MACHINE PROGRAM --

    COMMENT  0
a:
    INBOX
    OUTBOX
    JUMP     a


DEFINE COMMENT 0
eJzzYGBg+M+sFsUAAJmIAOE;
"""
    program = load_script(script)

    assert [block.name for block in program] == ["entry", "a"]
    assert len(program.get_block_by_label("a")) == 3


def test_parse_error_reports_line() -> None:
    with pytest.raises(ScriptFormatError) as excinfo:
        load_script("-- HUMAN RESOURCE MACHINE PROGRAM --\n\na:\n    INBOX\n    TELEPORT 3\n")

    assert excinfo.value.line_num == 5
    assert excinfo.value.line_text == "TELEPORT 3"
    assert "line 5" in str(excinfo.value)


def test_duplicate_label_is_rejected() -> None:
    with pytest.raises(ScriptFormatError, match="defined twice"):
        load_script("a:\nINBOX\na:\nOUTBOX\n")


def test_loader_does_not_validate_jumps() -> None:
    program = load_script("a:\nJUMP b\nb:\nJUMPZ z\n")

    assert program.dangling_labels() == ["z"]


def test_load_script_from_path(tmp_path) -> None:
    path = tmp_path / "pair_sum.hrm"
    path.write_text(PAIR_SUM, encoding="utf-8")

    assert load_script_from_path(path) == load_script(PAIR_SUM)
