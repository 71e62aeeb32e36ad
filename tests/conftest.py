"""Shared pytest fixtures for cexpr tests."""

from __future__ import annotations

import pytest

from cexpr.core.symbols import Slot, SymbolTable


class RecordingResolver:
    """Resolver that remembers every name it was asked for, in order."""

    def __init__(self) -> None:
        self.slots: dict[str, Slot] = {}
        self.reads: list[str] = []

    def __call__(self, name: str) -> Slot:
        self.reads.append(name)
        return self.slots.setdefault(name, Slot())


@pytest.fixture
def symbols() -> SymbolTable:
    """Return an empty symbol table."""
    return SymbolTable()


@pytest.fixture
def registers() -> SymbolTable:
    """Return a symbol table pre-loaded with register values."""
    return SymbolTable({"%r0": 128, "%r1": 22, "%r2": 7})


@pytest.fixture
def recorder() -> RecordingResolver:
    """Return a resolver that records variable accesses."""
    return RecordingResolver()
