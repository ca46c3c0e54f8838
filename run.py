"""Command-line entry point for the Human Resource Machine interpreter.

Reads a script as copied from the game, runs it against the given inbox and
floor preset, and prints the outbox separated by spaces.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, Sequence

from pyhrm.interpreter import ExecuteScriptError
from pyhrm.loader import (
    MemoryPresetFormatError,
    ScriptFormatError,
    load_memory_preset_from_path,
    load_script_from_path,
    parse_memory_preset,
)
from pyhrm.memory import MemoryAccessError
from pyhrm.script import InvalidJumpError, Value, parse_value
from pyhrm.system import MachineConfig, create_machine


def _value_arg(token: str) -> Value:
    try:
        return parse_value(token)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid input value: {token}") from exc


def _non_negative_int(token: str) -> int:
    try:
        number = int(token)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {token!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {token!r}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="Human Resource Machine interpreter",
    )
    parser.add_argument(
        "script",
        type=Path,
        help="Path to the script file as copied from the game",
    )
    parser.add_argument(
        "-i",
        "--inputs",
        nargs="+",
        type=_value_arg,
        default=[],
        metavar="VALUE",
        help="Values placed on the inbox, e.g. -i 10 20 30 A E F (default: no input values)",
    )
    parser.add_argument(
        "-m",
        "--memory",
        nargs="+",
        default=[],
        metavar="ADDRESS_VALUE",
        help=(
            "Starting floor tiles as address/value couples, or a file holding them, "
            "e.g. -m 0 10 1 A 2 30 | -m memory.txt (default: empty floor)"
        ),
    )
    parser.add_argument(
        "-M",
        "--max-mem",
        type=_non_negative_int,
        default=None,
        metavar="MAX_ADDRESS",
        help="Last tile number available, e.g. -M 24 (default: no maximum)",
    )
    parser.add_argument(
        "--max-steps",
        type=_non_negative_int,
        default=None,
        help="Abort after executing this many instructions (default: unbounded)",
    )
    parser.add_argument(
        "--trace",
        type=_non_negative_int,
        default=0,
        metavar="N",
        help="Print the last N executed instructions when the run fails",
    )
    return parser


def _load_memory(parser: argparse.ArgumentParser, tokens: Sequence[str]) -> Dict[int, Value]:
    if len(tokens) == 1:
        path = Path(tokens[0])
        if not path.exists():
            parser.error(f"memory file not found: {path}")
        return load_memory_preset_from_path(path)
    return parse_memory_preset(tokens)


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.script.exists():
        parser.error(f"script file not found: {args.script}")

    try:
        program = load_script_from_path(args.script)
        program.validate()
        config = MachineConfig(
            memory_preset=_load_memory(parser, args.memory),
            max_address=args.max_mem,
            max_steps=args.max_steps,
            trace_capacity=args.trace or None,
        )
        machine = create_machine(config)
    except (ScriptFormatError, InvalidJumpError, MemoryPresetFormatError, MemoryAccessError) as exc:
        parser.exit(1, f"run.py: {exc}\n")

    try:
        outputs = machine.run(program, args.inputs, validate=False)
    except ExecuteScriptError as exc:
        message = f"run.py: {exc}\n"
        if exc.trace:
            message += "  trace:\n" + "".join(f"    {line}\n" for line in exc.trace)
        parser.exit(1, message)

    print(" ".join(str(value) for value in outputs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
