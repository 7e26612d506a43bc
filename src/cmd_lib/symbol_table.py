"""
Symbol Table - caller-supplied values for ${name} substitution

This module provides the table a caller fills in before resolving a
command template. It is the explicit replacement for capturing local
variables at the call site: the caller names each value it wants to
inject.

Architecture:
    - SymbolTable: Simple dict-based storage, keys unique, last set wins
    - Read by VariableResolver while expanding ${name}
    - Owned by the caller; the resolver never mutates it

Example:
    >>> table = SymbolTable()
    >>> table.set('file', 'my notes.txt')
    >>> table.get('file')
    'my notes.txt'
    >>> table.get('missing', 'default')
    'default'
"""

from typing import Any, Dict, ItemsView, Iterator, Mapping, Optional


class SymbolTable:
    """
    Name → value table for variable resolution.

    Values are stored as their str() form, so numbers and paths can be
    passed directly.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        """Initialize table, optionally seeded from a mapping"""
        self._variables: Dict[str, str] = {}
        if values:
            self.update(values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'SymbolTable':
        """
        Build a table from any mapping (returned as-is if already a table)

        Args:
            values: Mapping of variable name to value

        Returns:
            SymbolTable with the same entries
        """
        if isinstance(values, cls):
            return values
        return cls(values)

    def set(self, name: str, value: Any) -> None:
        """
        Set a variable

        Args:
            name: Variable name
            value: Variable value (stored as str)
        """
        self._variables[name] = str(value)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a variable value

        Args:
            name: Variable name
            default: Default value if not found

        Returns:
            Variable value or default
        """
        return self._variables.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._variables

    def delete(self, name: str) -> None:
        self._variables.pop(name, None)

    def clear(self) -> None:
        """Clear all variables"""
        self._variables.clear()

    def copy(self) -> 'SymbolTable':
        new_table = SymbolTable()
        new_table._variables = self._variables.copy()
        return new_table

    def items(self) -> ItemsView[str, str]:
        return self._variables.items()

    def __getitem__(self, name: str) -> str:
        return self._variables[name]

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"SymbolTable({self._variables})"
