from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

JSONRPC_VERSION = "2.0"


def is_error(value: Any) -> bool:
    """True when a response's "error" member reports a failure.

    Only null, false, 0 and "" mean success; an empty object or array is
    still an error.
    """
    return bool(value) or isinstance(value, (dict, list))


@dataclass(frozen=True)
class RpcRequest:
    method: str
    params: list[Any] = field(default_factory=list)
    id: int = 0
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": list(self.params),
            "id": self.id,
        }


@dataclass(frozen=True)
class RpcResponse:
    id: Optional[int]
    result: Any = None
    error: Any = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RpcResponse":
        return cls(
            id=payload.get("id"),
            result=payload.get("result"),
            error=payload.get("error"),
        )

    @property
    def ok(self) -> bool:
        return not is_error(self.error)

    def to_dict(self) -> dict[str, Any]:
        return {"result": self.result, "error": self.error, "id": self.id}


def correlate(
    requests: Iterable[RpcRequest],
    responses: Iterable[dict[str, Any]],
) -> dict[int, RpcResponse]:
    """Map each request id to its batch response entry.

    Entries whose id matches no request are dropped; requests without an
    answer are absent from the result.
    """
    wanted = {request.id for request in requests}
    matched: dict[int, RpcResponse] = {}
    for entry in responses:
        if not isinstance(entry, dict):
            continue
        response = RpcResponse.from_dict(entry)
        if response.id in wanted:
            matched[response.id] = response
    return matched


__all__ = [
    "JSONRPC_VERSION",
    "RpcRequest",
    "RpcResponse",
    "correlate",
]
