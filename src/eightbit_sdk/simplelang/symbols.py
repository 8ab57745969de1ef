"""
Symbol Table for Simplelang Code Generation
===========================================

Simplelang has a single flat scope per compilation unit. Every 'int'
declaration appends one Symbol whose address is its position in
declaration order, starting at 0. Symbols are never removed, and
addresses do not depend on how often or in which order the variables
are later read or written.

A SymbolTable belongs to exactly one code generation run, so separate
compilations never see each other's variables.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from eightbit_sdk.errors import SourceLocation
from eightbit_sdk.simplelang.errors import (
    UndefinedVariableError,
    DuplicateSymbolError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Variable name
        address: Memory address (0-based declaration index)
        location: Where the variable was declared
    """
    name: str
    address: int
    location: Optional[SourceLocation] = field(default=None, compare=False)


class SymbolTable:
    """
    Append-only, declaration-ordered mapping of variable names to addresses.

    Usage:
        table = SymbolTable()
        table.declare("a")          # Symbol('a', 0)
        table.declare("b")          # Symbol('b', 1)
        table.lookup("b").address   # 1

    Attributes:
        allow_redeclaration: If True, a second declaration of a name is
            ignored with a warning instead of raising DuplicateSymbolError
    """

    def __init__(self, allow_redeclaration: bool = False):
        self.allow_redeclaration = allow_redeclaration
        self._symbols: dict[str, Symbol] = {}

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        """Iterate symbols in address order."""
        return iter(self._symbols.values())

    def declare(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> Symbol:
        """
        Add a variable at the next free address.

        Returns:
            The new Symbol (or the existing one for an allowed redeclaration)

        Raises:
            DuplicateSymbolError: If `name` is already declared and
                redeclaration is not allowed
        """
        existing = self._symbols.get(name)
        if existing is not None:
            if not self.allow_redeclaration:
                raise DuplicateSymbolError(
                    name,
                    location=location,
                    original_location=existing.location,
                    source_line=source_line,
                )
            logger.warning(
                "%s: redeclaration of '%s' ignored, keeping address %d",
                location or "<input>", name, existing.address,
            )
            return existing

        symbol = Symbol(name=name, address=len(self._symbols), location=location)
        self._symbols[name] = symbol
        logger.debug("declared '%s' at address %d", name, symbol.address)
        return symbol

    def lookup(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> Symbol:
        """
        Resolve a variable name.

        Raises:
            UndefinedVariableError: If `name` was never declared
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            raise UndefinedVariableError(
                name,
                location=location,
                source_line=source_line,
                similar_names=self._find_similar_names(name),
            )
        return symbol

    def memory_map(self) -> list[str]:
        """One 'address  name' line per symbol, in address order."""
        return [f"{symbol.address:>5}  {symbol.name}" for symbol in self]

    def _find_similar_names(self, name: str) -> list[str]:
        """
        Find declared names close to `name` for error hints.

        Uses a simple edit distance heuristic.
        """
        name_lower = name.lower()
        similar = []

        for candidate in self._symbols:
            candidate_lower = candidate.lower()
            if (
                candidate_lower == name_lower or
                abs(len(candidate) - len(name)) <= 1 and
                _edit_distance(name_lower, candidate_lower) <= 2
            ):
                similar.append(candidate)

        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(
                    distances[j],
                    distances[j + 1],
                    new_distances[-1],
                ))
        distances = new_distances
    return distances[-1]
