"""
Batch Coordinator - Accumulate calls and send them as one JSON-RPC batch.
"""

from __future__ import annotations

from typing import Any, Optional

from ..errors import InvalidStateError
from ..schema.models import RpcRequest
from ..utils import random_request_id
from .builder import build_request
from .methods import MethodTable


class BatchSession:
    """
    Ordered requests collected for a single batch exchange.

    A session is handed to the caller's build function, then closed once
    its payload has been sent.  Ids are unique within the session.
    """

    def __init__(self, table: MethodTable) -> None:
        self._table = table
        self._requests: list[RpcRequest] = []
        self._ids: set[int] = set()
        self._closed = False

    @property
    def requests(self) -> list[RpcRequest]:
        return list(self._requests)

    @property
    def closed(self) -> bool:
        return self._closed

    def invoke(self, method: str, *args: Any) -> RpcRequest:
        """Append a call to the batch and return the request built for it."""
        if self._closed:
            raise InvalidStateError("Batch session is closed")
        request = build_request(
            method,
            args,
            table=self._table,
            batching=True,
            request_id=self._unique_id(),
        )
        self._requests.append(request)
        return request

    def payload(self) -> list[dict[str, Any]]:
        return [request.to_dict() for request in self._requests]

    def close(self) -> None:
        self._closed = True

    def _unique_id(self) -> int:
        request_id: Optional[int] = None
        while request_id is None or request_id in self._ids:
            request_id = random_request_id()
        self._ids.add(request_id)
        return request_id

    def __len__(self) -> int:
        return len(self._requests)
