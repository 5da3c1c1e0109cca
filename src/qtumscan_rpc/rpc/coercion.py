"""
Type coercion for positional RPC parameters.

Each type tag maps to a pure function turning a raw caller value into the
value placed on the wire.  Unknown tags coerce as ``string``.
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable

from ..errors import InvalidArgumentError

STRING = "string"
INTEGER = "integer"
FLOAT = "float"
BOOLEAN = "boolean"
OBJECT = "object"


def _decode(raw: bytes, tag: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidArgumentError(f"Cannot coerce {raw!r} to {tag}: {exc.reason}") from None


def to_string(raw: Any) -> str:
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if raw is None:
        return "null"
    if isinstance(raw, (dict, list, tuple)):
        return json.dumps(raw, separators=(",", ":"))
    if isinstance(raw, bytes):
        return _decode(raw, STRING)
    return str(raw)


def _to_number(raw: Any, tag: str) -> int | float:
    if isinstance(raw, bool):
        raise InvalidArgumentError(f"Cannot coerce boolean {raw!r} to {tag}")

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        value = raw
    else:
        text = _decode(raw, tag) if isinstance(raw, bytes) else str(raw)
        text = text.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            raise InvalidArgumentError(f"Cannot coerce {raw!r} to {tag}") from None

    if not math.isfinite(value):
        raise InvalidArgumentError(f"Cannot coerce {raw!r} to {tag}: not a finite number")
    if value.is_integer():
        return int(value)
    return value


def to_integer(raw: Any) -> int | float:
    return _to_number(raw, INTEGER)


def to_float(raw: Any) -> int | float:
    return _to_number(raw, FLOAT)


def to_boolean(raw: Any) -> bool:
    if raw is True:
        return True
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw == 1
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true")
    return False


def to_object(raw: Any) -> Any:
    if isinstance(raw, bytes):
        raw = _decode(raw, OBJECT)
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidArgumentError(f"Cannot coerce {raw!r} to object: {exc}") from None


COERCERS: dict[str, Callable[[Any], Any]] = {
    STRING: to_string,
    INTEGER: to_integer,
    FLOAT: to_float,
    BOOLEAN: to_boolean,
    OBJECT: to_object,
}


def coercer_for(tag: str) -> Callable[[Any], Any]:
    return COERCERS.get(tag, to_string)


def coerce(tag: str, raw: Any) -> Any:
    """Coerce ``raw`` according to ``tag``.

    Raises:
        InvalidArgumentError: If a numeric or object value cannot be parsed
    """
    return coercer_for(tag)(raw)
