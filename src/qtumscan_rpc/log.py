"""
Logging collaborator for the RPC client.

The client never touches a global logger configuration; it receives an
``RpcLogger`` at construction.  ``LoguruLogger`` is the stock implementation
and routes each channel through loguru, filtered by a named profile.
"""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger as _loguru

CHANNELS = ("info", "warn", "error", "debug")

PROFILES: dict[str, frozenset[str]] = {
    "none": frozenset(),
    "normal": frozenset({"info", "warn", "error"}),
    "debug": frozenset(CHANNELS),
}

DEFAULT_PROFILE = "normal"


class RpcLogger(Protocol):
    def info(self, message: str) -> None:
        ...

    def warn(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def debug(self, message: str) -> None:
        ...


class LoguruLogger:
    """RpcLogger backed by loguru, with per-profile channel filtering."""

    def __init__(self, profile: str = DEFAULT_PROFILE, sink: Any = None) -> None:
        if profile not in PROFILES:
            raise ValueError(
                f"Unknown log profile: {profile!r} (expected one of {', '.join(PROFILES)})"
            )
        self.profile = profile
        self._channels = PROFILES[profile]
        self._sink = sink if sink is not None else _loguru.bind(component="qtumscan_rpc")

    def enabled(self, channel: str) -> bool:
        return channel in self._channels

    def info(self, message: str) -> None:
        if "info" in self._channels:
            self._sink.opt(depth=1).info(message)

    def warn(self, message: str) -> None:
        if "warn" in self._channels:
            self._sink.opt(depth=1).warning(message)

    def error(self, message: str) -> None:
        if "error" in self._channels:
            self._sink.opt(depth=1).error(message)

    def debug(self, message: str) -> None:
        if "debug" in self._channels:
            self._sink.opt(depth=1).debug(message)


def make_logger(profile: str = DEFAULT_PROFILE) -> LoguruLogger:
    return LoguruLogger(profile)
