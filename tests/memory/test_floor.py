"""Unit tests for the floor tile memory."""

from __future__ import annotations

import pytest

from pyhrm.memory import (
    EmptyTileError,
    Memory,
    NegativeAddressError,
    NoValueAtPointerError,
    NotANumberError,
    OutOfBoundsError,
)
from pyhrm.script import Character, Number, direct, indirect


def make_memory(tiles: dict | None = None, max_address: int | None = 10) -> Memory:
    return Memory(tiles or {}, max_address)


def test_memory_with_data() -> None:
    memory = Memory({1: Number(42)}, 10)

    assert memory.get(1) == Number(42)
    assert memory.get(0) is None
    assert len(memory) == 1


def test_memory_defaults_to_unbounded() -> None:
    memory = Memory()

    assert memory.max_address is None
    memory.set(1_000_000, Character("Z"))
    assert memory.get(1_000_000) == Character("Z")


def test_memory_valid_addresses() -> None:
    memory = Memory(max_address=10)

    assert memory.is_valid_address(0)
    assert memory.is_valid_address(10)
    assert not memory.is_valid_address(11)
    assert not memory.is_valid_address(-1)


def test_memory_set_then_get() -> None:
    memory = Memory(max_address=10)
    for address in range(11):
        memory.set(address, Number(address * 2))
    for address in range(11):
        assert memory.get(address) == Number(address * 2)


def test_memory_set_none_clears_tile() -> None:
    memory = Memory()
    memory.set(1, Number(42))
    memory.set(1, None)

    assert memory.get(1) is None
    assert len(memory) == 0


def test_memory_set_out_of_bounds() -> None:
    memory = Memory(max_address=10)

    with pytest.raises(OutOfBoundsError) as excinfo:
        memory.set(11, Number(42))

    assert excinfo.value.address == 11
    assert excinfo.value.max_address == 10
    assert memory.get(11) is None


def test_memory_get_never_fails_beyond_bounds() -> None:
    memory = Memory(max_address=3)

    assert memory.get(4) is None
    assert memory.get(10_000) is None


def test_memory_rejects_preset_beyond_bounds() -> None:
    with pytest.raises(OutOfBoundsError):
        Memory({5: Number(1)}, max_address=4)


def test_resolve_direct_address() -> None:
    memory = Memory(max_address=10)

    assert memory.resolve(direct(7)) == 7
    with pytest.raises(OutOfBoundsError):
        memory.resolve(direct(11))


def test_resolve_indirect_address() -> None:
    memory = make_memory({0: Number(5), 5: Character("B")})

    assert memory.resolve(indirect(0)) == 5
    assert memory.read(indirect(0)) == Character("B")


def test_resolve_indirect_through_empty_tile() -> None:
    memory = make_memory()

    with pytest.raises(NoValueAtPointerError) as excinfo:
        memory.resolve(indirect(3))

    assert excinfo.value.pointer == 3


def test_resolve_indirect_through_character() -> None:
    memory = make_memory({2: Character("A")})

    with pytest.raises(NotANumberError):
        memory.resolve(indirect(2))


def test_resolve_indirect_through_negative_number() -> None:
    memory = make_memory({2: Number(-1)})

    with pytest.raises(NegativeAddressError) as excinfo:
        memory.resolve(indirect(2))

    assert excinfo.value.value == -1


def test_resolve_indirect_out_of_bounds() -> None:
    memory = make_memory({0: Number(11)}, max_address=10)

    with pytest.raises(OutOfBoundsError) as excinfo:
        memory.resolve(indirect(0))

    assert excinfo.value.address == 11
    assert "[0]" in str(excinfo.value)


def test_read_empty_tile() -> None:
    memory = make_memory()

    with pytest.raises(EmptyTileError) as excinfo:
        memory.read(direct(4))

    assert excinfo.value.address == 4


def test_write_through_pointer() -> None:
    memory = make_memory({0: Number(3)})

    address = memory.write(indirect(0), Number(99))

    assert address == 3
    assert memory.get(3) == Number(99)


def test_snapshot_is_sorted_copy() -> None:
    memory = make_memory({4: Number(1), 1: Character("X")})

    snapshot = memory.snapshot()
    snapshot[9] = Number(0)

    assert list(memory.snapshot()) == [1, 4]
    assert memory.get(9) is None
    assert memory.format_dump() == "1: X, 4: 1"
    assert Memory().format_dump() == "(empty)"
