"""
Error taxonomy for the Qtum JSON-RPC client.

Client-side failures (bad arguments, auth, overload, transport, protocol,
batch misuse) share the ``Qtum JSON-RPC: `` message prefix.  Errors reported
by the node itself are raised as ``RpcServerError`` and keep the remote
error object untouched.
"""

from __future__ import annotations

from typing import Any, Optional

ERROR_PREFIX = "Qtum JSON-RPC: "


class RpcError(RuntimeError):
    exit_code: int = 1


class RpcClientError(RpcError):
    exit_code: int = 1
    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(ERROR_PREFIX + message)
        self.code = code
        self.status_code = status_code


class InvalidArgumentError(RpcClientError, ValueError):
    exit_code = 2


class InvalidStateError(RpcClientError):
    exit_code = 3


class AuthError(RpcClientError):
    exit_code = 4


class OverloadError(RpcClientError):
    """Node rejected the request because its work queue is full.

    Carries HTTP 429 semantics: the caller may retry later.
    """

    exit_code = 5
    retryable = True

    def __init__(self, message: str, *, status_code: Optional[int] = 500) -> None:
        super().__init__(message, code=429, status_code=status_code)


class ProtocolError(RpcClientError):
    exit_code = 6


class TransportError(RpcClientError):
    exit_code = 7


class RpcServerError(RpcError):
    exit_code = 8

    def __init__(self, error: Any) -> None:
        self.error = error
        if isinstance(error, dict):
            self.code = error.get("code")
            self.message = error.get("message", "")
        else:
            self.code = None
            self.message = str(error)
        super().__init__(self.message or str(error))


__all__ = [
    "ERROR_PREFIX",
    "AuthError",
    "InvalidArgumentError",
    "InvalidStateError",
    "OverloadError",
    "ProtocolError",
    "RpcClientError",
    "RpcError",
    "RpcServerError",
    "TransportError",
]
