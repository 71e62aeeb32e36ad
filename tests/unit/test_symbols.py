"""Tests for Slot and SymbolTable."""

from __future__ import annotations

import pytest

from cexpr.core.symbols import Slot, SymbolTable
from cexpr.core.value import Value


def test_slot_defaults_to_int_zero() -> None:
    assert Slot().value == Value.of_int(0)


def test_resolve_creates_zero_slot(symbols: SymbolTable) -> None:
    slot = symbols.resolve("a")
    assert slot.value == Value.zero()
    assert "a" in symbols
    assert symbols.resolve("a") is slot


def test_callable_as_resolver(symbols: SymbolTable) -> None:
    assert symbols("x") is symbols.resolve("x")


def test_initial_values_converted() -> None:
    table = SymbolTable({"a": 1, "b": 2.5, "c": True})
    assert table["a"] == Value.of_int(1)
    assert table["b"] == Value.of_float(2.5)
    assert table["c"] == Value.of_int(1)


def test_set_and_get(symbols: SymbolTable) -> None:
    symbols.set("n", Value.of_int(7))
    assert symbols.get("n") == Value.of_int(7)
    assert symbols.get("missing") is None


def test_getitem_missing_raises(symbols: SymbolTable) -> None:
    with pytest.raises(KeyError):
        symbols["missing"]


def test_items_sorted(symbols: SymbolTable) -> None:
    symbols.set("b", 2)
    symbols.set("a", 1)
    assert list(symbols.items()) == [("a", Value.of_int(1)), ("b", Value.of_int(2))]
    assert symbols.names() == ["a", "b"]
    assert len(symbols) == 2


def test_clear(registers: SymbolTable) -> None:
    registers.clear()
    assert len(registers) == 0
