"""
Client configuration.

Values come from keyword arguments, or from the environment via
``ClientConfig.from_env`` which first loads ``~/.qtumscan/.env`` (if present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from .utils import parse_bool

# Default config directory
QTUMSCAN_DIR = Path.home() / ".qtumscan"
QTUMSCAN_ENV = QTUMSCAN_DIR / ".env"

NETWORK_PORTS = {
    "mainnet": 3889,
    "testnet": 13889,
}

DEFAULT_TIMEOUT = 30.0
MAX_PORT = 65535


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for one RpcClient.

    Attributes:
        host: Node hostname or IP
        port: Node RPC port
        user: Basic auth username
        password: Basic auth password
        use_tls: POST over https instead of http
        reject_unauthorized: Verify the node's TLS certificate
        disable_connection_reuse: Open a new connection for every request
        timeout: Request timeout in seconds (None disables it)
    """

    host: str = "127.0.0.1"
    port: int = NETWORK_PORTS["mainnet"]
    user: str = "user"
    password: str = "pass"
    use_tls: bool = True
    reject_unauthorized: bool = True
    disable_connection_reuse: bool = False
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"Port must be an integer, got {self.port!r}")
        if not 1 <= self.port <= MAX_PORT:
            raise ValueError(f"Port must be between 1 and {MAX_PORT}, got {self.port}")

    @property
    def scheme(self) -> str:
        return "https" if self.use_tls else "http"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}/"

    @classmethod
    def from_env(
        cls,
        env_path: Optional[Path] = None,
        network: Optional[str] = None,
    ) -> "ClientConfig":
        """
        Build a config from environment variables.

        Args:
            env_path: Path to .env file (default: ~/.qtumscan/.env)
            network: "mainnet" or "testnet"; picks the default port

        Raises:
            ValueError: On an unknown network or a malformed value
        """
        env_path = env_path or QTUMSCAN_ENV
        env: dict[str, str] = {}
        if env_path.exists():
            env.update((k, v) for k, v in dotenv_values(env_path).items() if v is not None)
        # Process environment wins over the file.
        env.update(os.environ)

        network = network or env.get("QTUM_NETWORK", "mainnet")
        if network not in NETWORK_PORTS:
            raise ValueError(
                f"Unknown network: {network!r} (expected one of {', '.join(NETWORK_PORTS)})"
            )

        port_raw = env.get("QTUM_RPC_PORT")
        try:
            port = int(port_raw) if port_raw else NETWORK_PORTS[network]
        except ValueError:
            raise ValueError(f"QTUM_RPC_PORT must be an integer, got {port_raw!r}") from None

        timeout_raw = env.get("QTUM_RPC_TIMEOUT")
        timeout: Optional[float] = DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ValueError(
                    f"QTUM_RPC_TIMEOUT must be a number, got {timeout_raw!r}"
                ) from None
            if timeout <= 0:
                timeout = None

        # Anything but "http" means https.
        protocol = env.get("QTUM_RPC_PROTOCOL", "https").strip().lower()

        return cls(
            host=env.get("QTUM_RPC_HOST", cls.host),
            port=port,
            user=env.get("QTUM_RPC_USER", cls.user),
            password=env.get("QTUM_RPC_PASS", cls.password),
            use_tls=protocol != "http",
            reject_unauthorized=parse_bool(
                env.get("QTUM_RPC_REJECT_UNAUTHORIZED", "true")
            ),
            disable_connection_reuse=parse_bool(
                env.get("QTUM_RPC_DISABLE_AGENT", "false")
            ),
            timeout=timeout,
        )
