"""
RPC Client - Generic dispatch over the method table.

    async with RpcClient(ClientConfig(port=13889)) as client:
        block_hash = await client.invoke("getBlockHash", 5)
        responses = await client.batch(
            lambda batch: [batch.invoke("getBlockHash", h) for h in range(3)]
        )
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Optional

import httpx

from ..config import ClientConfig
from ..errors import InvalidStateError, ProtocolError
from ..log import RpcLogger, make_logger
from .batch import BatchSession
from .builder import build_request
from .methods import MethodTable
from .transport import HttpTransport


class RpcClient:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        logger: Optional[RpcLogger] = None,
        methods: Optional[MethodTable] = None,
        transport: Optional[HttpTransport] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.logger = logger or make_logger()
        self.methods = methods if methods is not None else MethodTable.default()
        self.transport = transport or HttpTransport(
            self.config, self.logger, http_transport=http_transport
        )
        self._batch: Optional[BatchSession] = None

    @property
    def batch_open(self) -> bool:
        return self._batch is not None

    async def invoke(self, method: str, *args: Any) -> Any:
        """
        Call ``method`` on the node and return its result.

        Args:
            method: Method identifier, any case (e.g. "getBlockHash")
            *args: Positional parameters, coerced per the method table

        Raises:
            InvalidArgumentError: Unknown method or uncoercible argument
            RpcClientError: Auth, overload, protocol or transport failure
            RpcServerError: The node reported an error
        """
        request = build_request(method, args, table=self.methods)
        return await self.transport.send(request)

    async def batch(self, build: Callable[[BatchSession], Any]) -> list[Any]:
        """
        Run ``build`` against a fresh BatchSession and send its calls at once.

        Returns the raw decoded response list; entries are matched to
        requests by id (see ``schema.models.correlate``).

        Raises:
            InvalidStateError: Another batch is already open on this client,
                or ``build`` is a coroutine function
        """
        if self._batch is not None:
            raise InvalidStateError("A batch is already in progress on this client")

        session = BatchSession(self.methods)
        self._batch = session
        try:
            built = build(session)
            if inspect.isawaitable(built):
                if inspect.iscoroutine(built):
                    built.close()
                raise InvalidStateError("Batch build function must be synchronous")
            session.close()
            if not len(session):
                return []
            self.logger.debug(f"Sending batch of {len(session)} calls")
            responses = await self.transport.send(session.requests)
            if not isinstance(responses, list):
                raise ProtocolError("Expected a JSON array in reply to a batch")
            return responses
        finally:
            session.close()
            self._batch = None

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
