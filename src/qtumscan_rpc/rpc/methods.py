"""
Method Table - Known node methods and their parameter type tags.

Single source of truth: schema/data/methods.json, checked by
``schema.table.read_method_table`` when loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from ..errors import InvalidArgumentError
from ..schema.table import check_method_table, read_method_table


@dataclass(frozen=True)
class MethodSpec:
    name: str
    tags: tuple[str, ...]

    @property
    def wire_name(self) -> str:
        return self.name.lower()


class MethodTable:
    """Case-insensitive lookup from method identifier to MethodSpec."""

    def __init__(self, methods: Mapping[str, Any]) -> None:
        self._by_wire: dict[str, MethodSpec] = {}
        for name, tags in methods.items():
            spec = MethodSpec(name=name, tags=tuple(tags))
            self._by_wire[spec.wire_name] = spec

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "MethodTable":
        """Build a table from a {"version", "methods"} document.

        Raises:
            MethodTableError: If the document fails validation
        """
        return cls(check_method_table(payload))

    @classmethod
    def from_path(cls, path: Path) -> "MethodTable":
        return cls(read_method_table(path))

    @classmethod
    def default(cls) -> "MethodTable":
        return _default_table()

    def get(self, method: str) -> Optional[MethodSpec]:
        return self._by_wire.get(method.lower())

    def lookup(self, method: str) -> MethodSpec:
        spec = self.get(method)
        if spec is None:
            raise InvalidArgumentError(f"Unknown RPC method: {method}")
        return spec

    def __contains__(self, method: object) -> bool:
        return isinstance(method, str) and method.lower() in self._by_wire

    def __iter__(self) -> Iterator[MethodSpec]:
        return iter(sorted(self._by_wire.values(), key=lambda s: s.wire_name))

    def __len__(self) -> int:
        return len(self._by_wire)


@lru_cache(maxsize=1)
def _default_table() -> MethodTable:
    return MethodTable(read_method_table())
