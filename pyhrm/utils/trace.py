"""Lightweight execution trace buffer for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .debug import debug_log


@dataclass
class TraceEntry:
    step: int
    block: str
    index: int
    instruction: str
    head: str | None
    outcome: str
    note: str = ""


class TraceRecorder:
    """Ring buffer that stores the most recent interpreter steps."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[TraceEntry | None] = [None] * capacity
        self._index = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def record_step(
        self,
        step: int,
        block: str,
        index: int,
        instruction: object,
        head: object | None,
        outcome: str,
        *,
        note: str = "",
    ) -> None:
        entry = TraceEntry(
            step=step,
            block=block,
            index=index,
            instruction=str(instruction),
            head=None if head is None else str(head),
            outcome=outcome,
            note=note,
        )
        self._append(entry)

    def entries(self, limit: int | None = None) -> Iterable[TraceEntry]:
        count = self._size if limit is None else min(self._size, max(limit, 0))
        for offset in range(count):
            index = (self._index - count + offset) % self._capacity
            entry = self._entries[index]
            if entry is not None:
                yield entry

    def last_entry(self) -> TraceEntry | None:
        if self._size == 0:
            return None
        index = (self._index - 1) % self._capacity
        return self._entries[index]

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        lines: list[str] = []
        for entry in self.entries(limit):
            head = "-" if entry.head is None else entry.head
            line = (
                f"step={entry.step:05d} {entry.block}[{entry.index}] {entry.instruction:<14} "
                f"head={head} -> {entry.outcome}"
            )
            if entry.note:
                line = f"{line} ({entry.note})"
            lines.append(line)
        return lines

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)

    def _append(self, entry: TraceEntry) -> None:
        self._entries[self._index] = entry
        self._index = (self._index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1
