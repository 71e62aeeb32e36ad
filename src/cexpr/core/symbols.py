"""
Variable bindings for expression evaluation.

The evaluator reaches variables only through a resolver: a callable that
maps a name to a mutable Slot. Hosts may supply any such callable (a
register file, an object's fields, ...). SymbolTable is a ready-made
dict-backed resolver that creates zero-valued slots on first access.

Usage:
    from cexpr import SymbolTable, eval_expr

    symbols = SymbolTable()
    eval_expr("a = b = 5", symbols)
    symbols["a"]    # Value(int, 5)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from cexpr.core.value import Value


@dataclass
class Slot:
    """A mutable cell holding the current Value of one variable."""

    value: Value = field(default_factory=Value.zero)


Resolver = Callable[[str], Slot]


class SymbolTable:
    """Dict-backed variable store usable directly as a resolver."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.symbols: dict[str, Slot] = {}
        for name, value in (initial or {}).items():
            self.set(name, value)

    def __call__(self, name: str) -> Slot:
        return self.resolve(name)

    def resolve(self, name: str) -> Slot:
        """Return the slot for name, creating a zero slot if needed."""
        slot = self.symbols.get(name)
        if slot is None:
            slot = self.symbols[name] = Slot()
        return slot

    def set(self, name: str, value: Value | int | float | bool) -> None:
        self.resolve(name).value = Value.from_python(value)

    def get(self, name: str) -> Value | None:
        slot = self.symbols.get(name)
        return slot.value if slot else None

    def items(self) -> Iterator[tuple[str, Value]]:
        """(name, value) pairs sorted by name."""
        for name in sorted(self.symbols):
            yield name, self.symbols[name].value

    def names(self) -> list[str]:
        return sorted(self.symbols)

    def clear(self) -> None:
        self.symbols.clear()

    def __getitem__(self, name: str) -> Value:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)
