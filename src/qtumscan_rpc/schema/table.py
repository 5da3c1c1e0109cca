"""
Method table loading and validation.

methods.json maps each method name to its ordered parameter type tags.  The
file is checked against methods.schema.json, then for names that collide
once lower-cased (the wire name), since the node matches methods
case-insensitively.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, NamedTuple, Optional

from jsonschema import Draft202012Validator, ValidationError

DATA_DIR = Path(__file__).resolve().parent / "data"
METHODS_FILE = DATA_DIR / "methods.json"
METHODS_SCHEMA = DATA_DIR / "methods.schema.json"


class TableProblem(NamedTuple):
    method: Optional[str]
    position: Optional[int]
    message: str

    def __str__(self) -> str:
        if self.method is None:
            return f"<table>: {self.message}"
        if self.position is None:
            return f"{self.method}: {self.message}"
        return f"{self.method} argument {self.position}: {self.message}"


class MethodTableError(ValueError):
    """A method table failed validation; ``problems`` lists every fault."""

    def __init__(self, source: str, problems: list[TableProblem]) -> None:
        self.source = source
        self.problems = problems
        details = "; ".join(str(problem) for problem in problems)
        super().__init__(f"Invalid method table {source}: {details}")


@lru_cache(maxsize=1)
def methods_validator() -> Draft202012Validator:
    with METHODS_SCHEMA.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _problem(error: ValidationError) -> TableProblem:
    path = list(error.absolute_path)
    if not path or path[0] != "methods":
        return TableProblem(None, None, error.message)
    if len(path) == 1:
        # propertyNames failures point at the mapping; the bad name is the instance
        if "propertyNames" in error.schema_path:
            return TableProblem(str(error.instance), None, "invalid method name")
        return TableProblem(None, None, f"methods: {error.message}")
    position = path[2] if len(path) > 2 and isinstance(path[2], int) else None
    return TableProblem(str(path[1]), position, error.message)


def _collisions(methods: dict[str, Any]) -> list[TableProblem]:
    seen: dict[str, str] = {}
    problems = []
    for name in methods:
        wire = name.lower()
        if wire in seen:
            problems.append(
                TableProblem(name, None, f"same wire name as {seen[wire]!r} ({wire})")
            )
        else:
            seen[wire] = name
    return problems


def check_method_table(payload: Any, source: str = "<dict>") -> dict[str, list[str]]:
    """
    Validate a method table document and return its ``methods`` mapping.

    Raises:
        MethodTableError: Listing each fault by method name and argument
            position
    """
    problems = [_problem(error) for error in methods_validator().iter_errors(payload)]
    if not problems:
        problems = _collisions(payload["methods"])
    if problems:
        problems.sort(key=lambda p: (p.method or "", -1 if p.position is None else p.position))
        raise MethodTableError(source, problems)
    return payload["methods"]


def read_method_table(path: Path = METHODS_FILE) -> dict[str, list[str]]:
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return check_method_table(payload, source=path.name)
