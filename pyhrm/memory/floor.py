"""Floor tiles: the sparse, optionally bounded memory of the worker.

A key feature of Human Resource Machine is that the number of tiles can be
(very) limited, so every write and every resolved address is checked against
``max_address`` (inclusive). ``None`` means the floor is unbounded.
"""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Tuple

from pyhrm.script.value import AddressExpression, Number, Value
from pyhrm.utils import debug_enabled, debug_log


class MemoryAccessError(Exception):
    """Base error for tile addressing failures."""


class OutOfBoundsError(MemoryAccessError):
    """Raised when an address lies beyond the last tile."""

    def __init__(
        self, address: int, max_address: int | None, expression: AddressExpression | None = None
    ) -> None:
        self.address = address
        self.max_address = max_address
        self.expression = expression
        source = f" given by {expression}" if expression is not None and expression.indirect else ""
        upper = "..." if max_address is None else max_address
        super().__init__(f"tile address {address}{source} out of bounds (accepted: [0, {upper}])")


class NoValueAtPointerError(MemoryAccessError):
    """Raised when an indirect address points through an empty tile."""

    def __init__(self, pointer: int, expression: AddressExpression) -> None:
        self.pointer = pointer
        self.expression = expression
        super().__init__(
            f"no value on tile {pointer} to be used as an address (given by {expression})"
        )


class NotANumberError(MemoryAccessError):
    """Raised when an indirect address points through a character."""

    def __init__(self, pointer: int, value: Value, expression: AddressExpression) -> None:
        self.pointer = pointer
        self.value = value
        self.expression = expression
        super().__init__(
            f"value {value} on tile {pointer} is not a number and cannot be used as an address (given by {expression})"
        )


class NegativeAddressError(MemoryAccessError):
    """Raised when an indirect address points through a negative number."""

    def __init__(self, pointer: int, value: int, expression: AddressExpression) -> None:
        self.pointer = pointer
        self.value = value
        self.expression = expression
        super().__init__(
            f"value {value} on tile {pointer} is negative, which is not a valid tile address (given by {expression})"
        )


class EmptyTileError(MemoryAccessError):
    """Raised when an instruction reads a tile holding nothing."""

    def __init__(self, address: int, expression: AddressExpression | None = None) -> None:
        self.address = address
        self.expression = expression
        source = f" given by {expression}" if expression is not None and expression.indirect else ""
        super().__init__(f"no value on tile {address}{source}")


class Memory:
    """Sparse mapping from tile address to value."""

    def __init__(self, data: Mapping[int, Value] | None = None, max_address: int | None = None) -> None:
        if max_address is not None and max_address < 0:
            raise ValueError(f"max_address must be non-negative, got {max_address}")
        self._max_address = max_address
        self._data: Dict[int, Value] = {}
        for address, value in (data or {}).items():
            if address < 0:
                raise ValueError(f"tile address must be non-negative, got {address}")
            if not self.is_valid_address(address):
                raise OutOfBoundsError(address, max_address)
            self._data[address] = value

    @property
    def max_address(self) -> int | None:
        return self._max_address

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Tuple[int, Value]]:
        return iter(sorted(self._data.items()))

    def __repr__(self) -> str:
        return f"Memory({self.snapshot()!r}, max_address={self._max_address!r})"

    def is_valid_address(self, address: int) -> bool:
        if address < 0:
            return False
        return self._max_address is None or address <= self._max_address

    def _check_bounds(self, address: int, expression: AddressExpression | None = None) -> None:
        if not self.is_valid_address(address):
            raise OutOfBoundsError(address, self._max_address, expression)

    # ------------------------------------------------------------------
    # Raw tile access

    def get(self, address: int) -> Value | None:
        """Return the value on ``address`` or ``None`` for an empty tile."""

        return self._data.get(address)

    def set(self, address: int, value: Value | None) -> None:
        """Put ``value`` on ``address``; ``None`` clears the tile."""

        self._check_bounds(address)
        if value is None:
            self._data.pop(address, None)
        else:
            self._data[address] = value
        if debug_enabled("memory"):
            debug_log("memory", "tile %d <- %s", address, "-" if value is None else value)

    # ------------------------------------------------------------------
    # Address expressions

    def resolve(self, expression: AddressExpression) -> int:
        """Translate a direct or indirect operand into a checked tile address."""

        if not expression.indirect:
            address = expression.operand
        else:
            pointer = expression.operand
            stored = self._data.get(pointer)
            if stored is None:
                raise NoValueAtPointerError(pointer, expression)
            if not isinstance(stored, Number):
                raise NotANumberError(pointer, stored, expression)
            if stored.value < 0:
                raise NegativeAddressError(pointer, stored.value, expression)
            address = stored.value
        self._check_bounds(address, expression)
        return address

    def read(self, expression: AddressExpression) -> Value:
        """Resolve ``expression`` and return its value, failing on an empty tile."""

        address = self.resolve(expression)
        value = self._data.get(address)
        if value is None:
            raise EmptyTileError(address, expression)
        return value

    def write(self, expression: AddressExpression, value: Value | None) -> int:
        """Resolve ``expression``, store ``value`` there and return the address."""

        address = self.resolve(expression)
        self.set(address, value)
        return address

    # ------------------------------------------------------------------
    # Diagnostics

    def snapshot(self) -> Dict[int, Value]:
        """Copy of every occupied tile, ordered by address."""

        return dict(sorted(self._data.items()))

    def format_dump(self) -> str:
        if not self._data:
            return "(empty)"
        return ", ".join(f"{address}: {value}" for address, value in sorted(self._data.items()))
