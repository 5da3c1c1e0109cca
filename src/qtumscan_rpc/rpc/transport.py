"""
Transport - POST a JSON-RPC payload to the node and decode the answer.

Uses httpx.AsyncClient.  One client is kept open and reused unless the
configuration disables connection reuse, in which case every request opens
and closes its own connection.
"""

from __future__ import annotations

import json
import traceback
from typing import Any, Optional, Sequence, Union

import httpx

from ..config import ClientConfig
from ..errors import (
    AuthError,
    OverloadError,
    ProtocolError,
    RpcServerError,
    TransportError,
)
from ..log import RpcLogger, make_logger
from ..schema.models import RpcRequest, is_error
from ..utils import basic_auth_header

WORK_QUEUE_EXCEEDED = "Work queue depth exceeded"

Payload = Union[RpcRequest, dict, Sequence[Union[RpcRequest, dict]]]


def encode_payload(payload: Payload) -> bytes:
    if isinstance(payload, RpcRequest):
        body: Any = payload.to_dict()
    elif isinstance(payload, dict):
        body = payload
    else:
        body = [item.to_dict() if isinstance(item, RpcRequest) else item for item in payload]
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def decode_response(status_code: int, body: str, logger: RpcLogger) -> Any:
    """
    Classify an HTTP response from the node.

    Args:
        status_code: HTTP status
        body: Full response body as text
        logger: Receives diagnostics when the body cannot be decoded

    Returns:
        The ``result`` member for a single call, or the raw decoded list
        for a batch

    Raises:
        AuthError: 401 / 403
        OverloadError: 500 with the work-queue rejection body
        ProtocolError: Body is not JSON, or not a JSON object / array
        RpcServerError: The node answered with a populated ``error``
    """
    if status_code == 401:
        raise AuthError("Connection Rejected: 401 Unauthorized", status_code=401)
    if status_code == 403:
        raise AuthError("Connection Rejected: 403 Forbidden", status_code=403)
    if status_code == 500 and body == WORK_QUEUE_EXCEEDED:
        raise OverloadError(body, status_code=500)

    try:
        parsed = json.loads(body)
    except ValueError as exc:
        logger.error(traceback.format_exc())
        logger.error(body)
        logger.error(f"HTTP Status code: {status_code}")
        raise ProtocolError(
            f"Error Parsing JSON: {exc}", status_code=status_code
        ) from exc

    if isinstance(parsed, list):
        return parsed
    if not isinstance(parsed, dict):
        logger.error(body)
        logger.error(f"HTTP Status code: {status_code}")
        raise ProtocolError(
            f"Unexpected response type: {type(parsed).__name__}",
            status_code=status_code,
        )
    error = parsed.get("error")
    if is_error(error):
        raise RpcServerError(error)
    return parsed.get("result")


class HttpTransport:
    """Sends serialized JSON-RPC payloads to one node."""

    def __init__(
        self,
        config: ClientConfig,
        logger: Optional[RpcLogger] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.logger = logger or make_logger()
        self._http_transport = http_transport
        self._client: Optional[httpx.AsyncClient] = None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": basic_auth_header(self.config.user, self.config.password),
        }
        if self.config.disable_connection_reuse:
            headers["Connection"] = "close"
        return headers

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=self.config.reject_unauthorized,
            timeout=self.config.timeout,
            transport=self._http_transport,
        )

    def _shared_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = self._new_client()
        return self._client

    async def send(self, payload: Payload) -> Any:
        """
        POST ``payload`` and return the decoded result.

        Raises:
            TransportError: Connection, TLS, socket or timeout failure
            AuthError, OverloadError, ProtocolError, RpcServerError: See
                ``decode_response``
        """
        content = encode_payload(payload)
        self.logger.debug(f"POST {self.config.url} ({len(content)} bytes)")

        try:
            if self.config.disable_connection_reuse:
                async with self._new_client() as client:
                    response = await self._post(client, content)
            else:
                response = await self._post(self._shared_client(), content)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request Error: timed out ({exc})") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Request Error: {exc}") from exc

        self.logger.debug(f"HTTP {response.status_code} ({len(response.content)} bytes)")
        return decode_response(response.status_code, response.text, self.logger)

    async def _post(self, client: httpx.AsyncClient, content: bytes) -> httpx.Response:
        return await client.post(self.config.url, content=content, headers=self._headers())

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
