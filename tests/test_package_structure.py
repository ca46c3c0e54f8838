"""Baseline tests ensuring the package layout loads correctly."""

import pyhrm


def test_package_exports() -> None:
    for name in ("script", "memory", "interpreter", "loader", "system", "utils"):
        assert hasattr(pyhrm, name), f"missing submodule: {name}"


def test_script_exports() -> None:
    from pyhrm import script

    for name in ("Value", "Number", "Character", "Instruction", "Opcode", "Block", "Program"):
        assert hasattr(script, name), f"script missing symbol: {name}"


def test_interpreter_exports() -> None:
    from pyhrm import interpreter

    for name in ("Interpreter", "ExecuteScriptError", "InstructionResult"):
        assert hasattr(interpreter, name), f"interpreter missing symbol: {name}"
