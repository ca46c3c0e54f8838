"""Machine assembly: floor memory plus interpreter for a single run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from pyhrm.interpreter import Interpreter
from pyhrm.memory import Memory
from pyhrm.script import Program, Value
from pyhrm.utils import TraceRecorder


@dataclass
class MachineConfig:
    """Runtime configuration for one run."""

    memory_preset: Dict[int, Value] = field(default_factory=dict)
    max_address: int | None = None
    max_steps: int | None = None
    trace_capacity: int | None = None


@dataclass
class Machine:
    """Aggregates the components taking part in a run."""

    memory: Memory
    interpreter: Interpreter
    trace: TraceRecorder | None = None

    def run(self, program: Program, inputs: Sequence[Value], *, validate: bool = True) -> List[Value]:
        """Validate ``program`` (unless told otherwise) and execute it."""

        if validate:
            program.validate()
        return self.interpreter.execute(program, inputs)


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a fresh machine with the requested configuration."""

    memory = Memory(config.memory_preset, config.max_address)
    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity else None
    interpreter = Interpreter(memory, max_steps=config.max_steps, trace=trace)
    return Machine(memory=memory, interpreter=interpreter, trace=trace)
