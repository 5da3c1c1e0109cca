"""
qtumscan-rpc - Async JSON-RPC client for Qtum nodes.

Generic dispatch over a validated method table, with per-position argument
coercion, Basic-auth HTTP(S) transport via httpx, and JSON-RPC batching.
"""
__all__ = [
    # Client
    "RpcClient",
    "BatchSession",
    "HttpTransport",
    "decode_response",
    # Configuration / logging
    "ClientConfig",
    "LoguruLogger",
    "RpcLogger",
    "make_logger",
    # Requests
    "MethodSpec",
    "MethodTable",
    "RpcRequest",
    "RpcResponse",
    "build_request",
    "coerce",
    "correlate",
    # Errors
    "AuthError",
    "InvalidArgumentError",
    "InvalidStateError",
    "OverloadError",
    "ProtocolError",
    "RpcClientError",
    "RpcError",
    "RpcServerError",
    "TransportError",
    # Method table schema
    "MethodTableError",
    "TableProblem",
]

from .config import ClientConfig
from .errors import (
    AuthError,
    InvalidArgumentError,
    InvalidStateError,
    OverloadError,
    ProtocolError,
    RpcClientError,
    RpcError,
    RpcServerError,
    TransportError,
)
from .log import LoguruLogger, RpcLogger, make_logger
from .rpc.batch import BatchSession
from .rpc.builder import build_request
from .rpc.client import RpcClient
from .rpc.coercion import coerce
from .rpc.methods import MethodSpec, MethodTable
from .rpc.transport import HttpTransport, decode_response
from .schema.models import RpcRequest, RpcResponse, correlate
from .schema.table import MethodTableError, TableProblem
