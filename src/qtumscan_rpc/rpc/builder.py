"""
Call Builder - Turn a method identifier and raw arguments into an RpcRequest.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..errors import ERROR_PREFIX, InvalidArgumentError
from ..schema.models import RpcRequest
from ..utils import next_request_id, random_request_id
from .coercion import coerce
from .methods import MethodTable


def coerce_params(method: str, tags: Sequence[str], args: Sequence[Any]) -> list[Any]:
    """
    Coerce positional arguments with their declared tags.

    Tags are per-position hints: arguments past the last tag are passed
    through unchanged and missing arguments are not an error.
    """
    params: list[Any] = []
    for index, raw in enumerate(args):
        if index >= len(tags):
            params.append(raw)
            continue
        try:
            params.append(coerce(tags[index], raw))
        except InvalidArgumentError as exc:
            raise InvalidArgumentError(
                f"Invalid argument {index} for {method}: {_strip_prefix(exc)}"
            ) from exc
    return params


def build_request(
    method: str,
    args: Sequence[Any],
    table: Optional[MethodTable] = None,
    batching: bool = False,
    request_id: Optional[int] = None,
) -> RpcRequest:
    """
    Build a JSON-RPC request for ``method``.

    Args:
        method: Method identifier, any case (e.g. "getBlockHash")
        args: Raw positional arguments
        table: Method table (default: bundled Qtum table)
        batching: Draw a random id suitable for a batch entry
        request_id: Explicit id, overrides both id strategies

    Raises:
        InvalidArgumentError: Unknown method or an argument that fails coercion
    """
    if table is None:
        table = MethodTable.default()
    spec = table.lookup(method)
    params = coerce_params(spec.wire_name, spec.tags, args)

    if request_id is None:
        request_id = random_request_id() if batching else next_request_id()

    return RpcRequest(method=spec.wire_name, params=params, id=request_id)


def _strip_prefix(exc: Exception) -> str:
    message = str(exc)
    return message[len(ERROR_PREFIX):] if message.startswith(ERROR_PREFIX) else message
