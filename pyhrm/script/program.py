"""Block-structured program representation (the parsed script object)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

from .instruction import Instruction

ENTRY_BLOCK = "entry"


class InvalidJumpError(Exception):
    """Raised when a jump names a block the program does not define."""

    def __init__(self, label: str, labels: Sequence[str] = ()) -> None:
        self.label = label
        self.labels: Tuple[str, ...] = tuple(labels) or (label,)
        if len(self.labels) > 1:
            listing = ", ".join(repr(name) for name in self.labels)
            message = f"cannot jump: no block with label {label!r} (dangling labels: {listing})"
        else:
            message = f"cannot jump: no block with label {label!r}"
        super().__init__(message)


@dataclass(frozen=True)
class Block:
    """Instructions following a jump label, executed top to bottom.

    A script without labels is a single ``entry`` block.
    """

    name: str
    index: int
    instructions: Tuple[Instruction, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "instructions", tuple(self.instructions))

    def __len__(self) -> int:
        return len(self.instructions)


class Program:
    """Ordered blocks plus a label lookup table.

    The program does not execute itself nor hold any run state; jump targets
    are only checked by :meth:`validate`.
    """

    def __init__(self, blocks: Sequence[Block]) -> None:
        if not blocks:
            raise ValueError("a program needs at least one block")
        self._blocks: List[Block] = list(blocks)
        self._labels: dict[str, int] = {}
        for position, block in enumerate(self._blocks):
            if block.index != position:
                raise ValueError(f"block {block.name!r} has index {block.index}, expected {position}")
            if block.name in self._labels:
                raise ValueError(f"duplicate block label {block.name!r}")
            self._labels[block.name] = position

    @classmethod
    def build(cls, sections: Iterable[Tuple[str, Sequence[Instruction]]]) -> "Program":
        """Create a program from ``(label, instructions)`` pairs in textual order."""

        blocks = [Block(name, index, tuple(instructions)) for index, (name, instructions) in enumerate(sections)]
        return cls(blocks)

    @property
    def blocks(self) -> Sequence[Block]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._blocks == other._blocks

    def __repr__(self) -> str:
        return f"Program({self._blocks!r})"

    def get_block_by_index(self, index: int) -> Block | None:
        if 0 <= index < len(self._blocks):
            return self._blocks[index]
        return None

    def get_block_by_label(self, label: str) -> Block | None:
        index = self._labels.get(label)
        if index is None:
            return None
        return self._blocks[index]

    def get_next(self, block: Block) -> Block | None:
        return self.get_block_by_index(block.index + 1)

    def instructions(self) -> Iterator[Instruction]:
        for block in self._blocks:
            yield from block.instructions

    def dangling_labels(self) -> List[str]:
        """Jump targets with no matching block, in order of first use."""

        missing: List[str] = []
        for instruction in self.instructions():
            if instruction.is_jump() and instruction.label not in self._labels and instruction.label not in missing:
                missing.append(instruction.label)
        return missing

    def validate(self) -> None:
        """Raise :class:`InvalidJumpError` if any jump targets a missing block."""

        missing = self.dangling_labels()
        if missing:
            raise InvalidJumpError(missing[0], missing)
