"""Interpreter executing block-structured scripts against the floor tiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Sequence, Tuple

from pyhrm.memory import Memory, MemoryAccessError
from pyhrm.script import Block, Character, Instruction, InvalidJumpError, Number, Program, Value
from pyhrm.utils import TraceRecorder, debug_enabled, debug_log


class InterpreterError(Exception):
    """Base error for interpreter failures."""


class EmptyHeadError(InterpreterError):
    """Raised when an instruction needs the held value but the hands are empty."""

    def __init__(self, instruction: Instruction) -> None:
        self.instruction = instruction
        super().__init__(f"cannot execute {instruction}: nothing in head")


class OperandTypeError(InterpreterError):
    """Raised when an instruction is applied to the wrong kind of value."""

    def __init__(self, instruction: Instruction, message: str) -> None:
        self.instruction = instruction
        super().__init__(f"cannot execute {instruction}: {message}")


class StepLimitExceededError(InterpreterError):
    """Raised when a run exceeds the caller-supplied instruction budget."""

    def __init__(self, max_steps: int) -> None:
        self.max_steps = max_steps
        super().__init__(f"step limit of {max_steps} instructions exceeded")


class ExecuteScriptError(InterpreterError):
    """Wraps any failure of a run together with a snapshot of the machine."""

    def __init__(
        self,
        cause: Exception,
        *,
        block: str | None,
        instruction_index: int | None,
        instruction: Instruction | None,
        step: int,
        head: Value | None,
        remaining_inputs: Sequence[Value],
        outputs: Sequence[Value],
        memory: Dict[int, Value],
        trace: Sequence[str] = (),
    ) -> None:
        self.cause = cause
        self.block = block
        self.instruction_index = instruction_index
        self.instruction = instruction
        self.step = step
        self.head = head
        self.remaining_inputs: Tuple[Value, ...] = tuple(remaining_inputs)
        self.outputs: Tuple[Value, ...] = tuple(outputs)
        self.memory = dict(memory)
        self.trace: Tuple[str, ...] = tuple(trace)
        super().__init__(self._render())

    def _render(self) -> str:
        if self.block is None:
            location = "before the first instruction"
        else:
            location = f"in block {self.block!r} at instruction {self.instruction_index} ({self.instruction})"
        memory = ", ".join(f"{address}: {value}" for address, value in sorted(self.memory.items()))
        lines = [
            f"error {location}, step {self.step}: {self.cause}",
            f"  head: {'-' if self.head is None else self.head}",
            f"  inputs remaining: {_join(self.remaining_inputs)}",
            f"  outputs so far: {_join(self.outputs)}",
            f"  memory: {memory or '(empty)'}",
        ]
        return "\n".join(lines)


def _join(values: Sequence[Value]) -> str:
    if not values:
        return "(none)"
    return " ".join(str(value) for value in values)


class Outcome(Enum):
    """What the interpreter does after an instruction or a block."""

    NEXT = auto()
    JUMP = auto()
    TERMINATE = auto()


@dataclass(frozen=True)
class InstructionResult:
    outcome: Outcome
    label: str | None = None

    @classmethod
    def jump(cls, label: str) -> "InstructionResult":
        return cls(Outcome.JUMP, label)

    def __str__(self) -> str:
        if self.outcome is Outcome.JUMP:
            return f"jump {self.label}"
        return self.outcome.name.lower()


NEXT_INSTRUCTION = InstructionResult(Outcome.NEXT)
TERMINATE = InstructionResult(Outcome.TERMINATE)


@dataclass
class Interpreter:
    """Holds the run state: the floor, the worker's head and the inbox cursor.

    Create one interpreter per run. ``execute`` either returns the outbox or
    raises :class:`ExecuteScriptError`; an instruction that fails leaves head
    and memory untouched.
    """

    memory: Memory
    head: Value | None = None
    next_input: int = 0
    steps: int = 0
    max_steps: int | None = None
    trace: TraceRecorder | None = None

    _block: Block | None = field(default=None, init=False, repr=False)
    _index: int | None = field(default=None, init=False, repr=False)
    _instruction: Instruction | None = field(default=None, init=False, repr=False)

    # ------------------------------------------------------------------
    # Program execution

    def execute(self, program: Program, inputs: Sequence[Value]) -> List[Value]:
        """Run ``program`` against ``inputs`` and return the values sent out."""

        outputs: List[Value] = []
        try:
            self._run(program, inputs, outputs)
        except (InterpreterError, InvalidJumpError, MemoryAccessError) as exc:
            raise self._wrap(exc, inputs, outputs) from exc
        return outputs

    def _run(self, program: Program, inputs: Sequence[Value], outputs: List[Value]) -> None:
        current = program.get_block_by_index(0)
        while current is not None:
            result = self.execute_block(current, inputs, outputs)
            if result.outcome is Outcome.TERMINATE:
                break
            if result.outcome is Outcome.JUMP:
                target = program.get_block_by_label(result.label)  # type: ignore[arg-type]
                if target is None:
                    raise InvalidJumpError(result.label)  # type: ignore[arg-type]
                if debug_enabled("jump"):
                    debug_log("jump", "%s -> %s", current.name, target.name)
                current = target
            else:
                current = program.get_next(current)
                if debug_enabled("jump"):
                    debug_log("jump", "fall through to %s", "end" if current is None else current.name)

    def execute_block(self, block: Block, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        """Run ``block`` top to bottom; ``NEXT`` means continue with the following block."""

        self._block = block
        for index, instruction in enumerate(block.instructions):
            self._index = index
            self._instruction = instruction
            if self.max_steps is not None and self.steps >= self.max_steps:
                raise StepLimitExceededError(self.max_steps)
            self.steps += 1
            try:
                result = self.execute_instruction(instruction, inputs, outputs)
            except (InterpreterError, MemoryAccessError) as exc:
                self._record(instruction, "error", note=type(exc).__name__)
                raise
            self._record(instruction, str(result))
            if result.outcome is not Outcome.NEXT:
                return result
        return NEXT_INSTRUCTION

    def execute_instruction(
        self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]
    ) -> InstructionResult:
        """Execute a single instruction against the current state."""

        handler = getattr(self, instruction.info.handler)
        result = handler(instruction, inputs, outputs)
        if debug_enabled("interpreter"):
            debug_log(
                "interpreter",
                "step=%d %-14s head=%s -> %s",
                self.steps,
                instruction,
                "-" if self.head is None else self.head,
                result,
            )
        return result

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_inbox(self, _: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        if self.next_input >= len(inputs):
            # An empty inbox ends the program normally.
            return TERMINATE
        self.head = inputs[self.next_input]
        self.next_input += 1
        return NEXT_INSTRUCTION

    def op_outbox(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        outputs.append(self._require_head(instruction))
        return NEXT_INSTRUCTION

    def op_copy_from(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        self.head = self.memory.read(instruction.address)
        return NEXT_INSTRUCTION

    def op_copy_to(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        value = self._require_head(instruction)
        self.memory.write(instruction.address, value)
        return NEXT_INSTRUCTION

    def op_add(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        head, operand = self._head_and_operand(instruction)
        if isinstance(head, Number) and isinstance(operand, Number):
            self.head = Number(head.value + operand.value)
            return NEXT_INSTRUCTION
        if isinstance(head, Character) and isinstance(operand, Character):
            raise OperandTypeError(instruction, f"cannot add characters (head: {head}, tile: {operand})")
        raise OperandTypeError(
            instruction, f"cannot add characters and numbers together (head: {head}, tile: {operand})"
        )

    def op_sub(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        head, operand = self._head_and_operand(instruction)
        if isinstance(head, Number) and isinstance(operand, Number):
            self.head = Number(head.value - operand.value)
            return NEXT_INSTRUCTION
        if isinstance(head, Character) and isinstance(operand, Character):
            # Characters subtract to their distance in the alphabet.
            self.head = Number(head.alphabetic_index() - operand.alphabetic_index())
            return NEXT_INSTRUCTION
        raise OperandTypeError(
            instruction, f"cannot subtract characters and numbers together (head: {head}, tile: {operand})"
        )

    def op_bump_up(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        return self._bump(instruction, 1)

    def op_bump_down(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        return self._bump(instruction, -1)

    def op_jump(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        return InstructionResult.jump(instruction.label)

    def op_jump_if_zero(self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]) -> InstructionResult:
        head = self._require_head(instruction)
        if isinstance(head, Number) and head.value == 0:
            return InstructionResult.jump(instruction.label)
        return NEXT_INSTRUCTION

    def op_jump_if_negative(
        self, instruction: Instruction, inputs: Sequence[Value], outputs: List[Value]
    ) -> InstructionResult:
        head = self._require_head(instruction)
        if isinstance(head, Number) and head.value < 0:
            return InstructionResult.jump(instruction.label)
        return NEXT_INSTRUCTION

    # ------------------------------------------------------------------
    # Helpers

    def _require_head(self, instruction: Instruction) -> Value:
        if self.head is None:
            raise EmptyHeadError(instruction)
        return self.head

    def _head_and_operand(self, instruction: Instruction) -> Tuple[Value, Value]:
        head = self._require_head(instruction)
        return head, self.memory.read(instruction.address)

    def _bump(self, instruction: Instruction, delta: int) -> InstructionResult:
        address = self.memory.resolve(instruction.address)
        value = self.memory.read(instruction.address)
        if not isinstance(value, Number):
            raise OperandTypeError(instruction, f"tile {address} holds {value}, which is not a number")
        bumped = Number(value.value + delta)
        self.memory.set(address, bumped)
        self.head = bumped
        return NEXT_INSTRUCTION

    def _record(self, instruction: Instruction, outcome: str, *, note: str = "") -> None:
        if self.trace is None or self._block is None:
            return
        self.trace.record_step(
            self.steps,
            self._block.name,
            self._index if self._index is not None else -1,
            instruction,
            self.head,
            outcome,
            note=note,
        )

    def _wrap(self, exc: Exception, inputs: Sequence[Value], outputs: List[Value]) -> ExecuteScriptError:
        trace: Sequence[str] = ()
        if self.trace is not None:
            trace = self.trace.format_entries()
        return ExecuteScriptError(
            exc,
            block=None if self._block is None else self._block.name,
            instruction_index=self._index,
            instruction=self._instruction,
            step=self.steps,
            head=self.head,
            remaining_inputs=inputs[self.next_input:],
            outputs=outputs,
            memory=self.memory.snapshot(),
            trace=trace,
        )
