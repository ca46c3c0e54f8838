"""Interpreter package: instruction semantics and block resolution."""

from .core import (
    NEXT_INSTRUCTION,
    TERMINATE,
    EmptyHeadError,
    ExecuteScriptError,
    InstructionResult,
    Interpreter,
    InterpreterError,
    OperandTypeError,
    Outcome,
    StepLimitExceededError,
)

__all__ = [
    "NEXT_INSTRUCTION",
    "TERMINATE",
    "EmptyHeadError",
    "ExecuteScriptError",
    "InstructionResult",
    "Interpreter",
    "InterpreterError",
    "OperandTypeError",
    "Outcome",
    "StepLimitExceededError",
]
