"""Scoped symbol table that assigns stack slots to locals and arguments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SymbolInfo:
    """A declared name: its kind ("local", "arg" or "global"), slot and scope depth."""

    name: str
    kind: str
    slot: int = -1
    layer: int = 0


class SymbolNotFound(LookupError):
    """Raised when a name is looked up that is not in scope."""


class SymbolTable:
    """Names declared in nested scopes, numbered per function."""

    def __init__(self) -> None:
        self._layer = 0
        self._local_count = 0
        self._arg_count = 0
        self._index: dict[str, int] = {}
        self._entries: list[SymbolInfo] = []

    @property
    def layer(self) -> int:
        """Current scope depth."""
        return self._layer

    def enter_function(self) -> None:
        """Open a function scope and restart slot numbering."""
        self._layer += 1
        self._local_count = 0
        self._arg_count = 0

    def enter_block(self) -> None:
        """Open a nested block scope."""
        self._layer += 1

    def leave_function(self) -> int:
        """Close every open scope and return the number of locals declared."""
        while self._layer > 0:
            self._discard_from(self._layer)
            self._layer -= 1
        return self._local_count

    def leave_block(self) -> None:
        """Close the innermost scope."""
        self._discard_from(self._layer)
        self._layer -= 1

    def register(self, name: str, kind: str) -> None:
        """Declare a name in the current scope, giving locals and args the next slot."""
        if kind == "local":
            self._local_count += 1
            slot = self._local_count
        elif kind == "arg":
            self._arg_count += 1
            slot = self._arg_count
        else:
            slot = 0
        self._entries.append(SymbolInfo(name, kind, slot, self._layer))
        self._index[name] = len(self._entries)

    def lookup(self, name: str) -> SymbolInfo:
        """Return the visible declaration of a name."""
        position = self._index.get(name, 0)
        if position <= 0 or position > len(self._entries):
            raise SymbolNotFound(name)
        return self._entries[position - 1]

    def _discard_from(self, layer: int) -> None:
        for i in range(len(self._entries) - 1, -1, -1):
            if self._entries[i].layer >= layer:
                self._unbind(self._entries[i].name)
                self._entries.pop()

    def _unbind(self, name: str) -> None:
        # The name falls back to its earliest remaining declaration, if any.
        position = self._index.get(name, 0)
        self._index[name] = next(
            (j + 1 for j in range(max(position - 1, 0)) if self._entries[j].name == name),
            0,
        )