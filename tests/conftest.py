"""Shared fixtures: a recording logger and a client wired to a fake node."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from qtumscan_rpc.config import ClientConfig
from qtumscan_rpc.rpc.client import RpcClient


class RecordingLogger:
    """RpcLogger that keeps every message per channel."""

    def __init__(self) -> None:
        self.records: dict[str, list[str]] = {"info": [], "warn": [], "error": [], "debug": []}

    def info(self, message: str) -> None:
        self.records["info"].append(message)

    def warn(self, message: str) -> None:
        self.records["warn"].append(message)

    def error(self, message: str) -> None:
        self.records["error"].append(message)

    def debug(self, message: str) -> None:
        self.records["debug"].append(message)


class FakeNode:
    """Stands in for the node: records requests, answers with a fixed reply."""

    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {"result": None, "error": None, "id": 1}
        self.requests: list[httpx.Request] = []

    def reply(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body

    def payload(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, Exception):
            raise self.body
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture()
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture()
def fake_node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(host="node.test", port=3889, user="alice", password="s3cret")


@pytest.fixture()
def make_client(
    config: ClientConfig,
    fake_node: FakeNode,
    recording_logger: RecordingLogger,
) -> Callable[..., RpcClient]:
    def _make(**overrides: Any) -> RpcClient:
        return RpcClient(
            overrides.pop("config", config),
            logger=overrides.pop("logger", recording_logger),
            http_transport=overrides.pop("http_transport", httpx.MockTransport(fake_node)),
            **overrides,
        )

    return _make
