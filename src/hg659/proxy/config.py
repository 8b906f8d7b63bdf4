"""Configuration for the local JSON proxy."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BIND: str = "127.0.0.1"
DEFAULT_PORT: int = 8659
DEFAULT_HOST: str = "192.168.1.1"
DEFAULT_USERNAME: str = "user"
DEFAULT_TIMEOUT_S: float = 30.0
DEFAULT_HEARTBEAT_INTERVAL_S: float = 30.0

# Environment variables consulted for defaults.
ENV_BIND: str = "HG659_BIND"
ENV_PORT: str = "HG659_PORT"
ENV_HOST: str = "HG659_HOST"
ENV_USERNAME: str = "HG659_USERNAME"
ENV_PASSWORD: str = "HG659_PASSWORD"
ENV_TIMEOUT: str = "HG659_TIMEOUT"
ENV_HEARTBEAT_INTERVAL: str = "HG659_HEARTBEAT_INTERVAL"


@dataclass(frozen=True)
class ProxyConfig:
    """Runtime settings for :class:`~hg659.proxy.server.ProxyServer`.

    Attributes:
        bind: Local interface to listen on.
        port: Local TCP port.
        host: Hostname or IP of the HG659 device.
        username: Device login username.
        password: Device login password.
        timeout_s: Per-request timeout towards the device.
        heartbeat_interval_s: Seconds between keep-alive calls; ``0`` disables
            the keep-alive worker.
    """

    bind: str = DEFAULT_BIND
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    username: str = DEFAULT_USERNAME
    password: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S
    heartbeat_interval_s: float = DEFAULT_HEARTBEAT_INTERVAL_S

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout must be positive: {self.timeout_s}")
        if self.heartbeat_interval_s < 0:
            raise ValueError(
                f"heartbeat interval must not be negative: {self.heartbeat_interval_s}"
            )

    def __repr__(self) -> str:
        return (
            f"ProxyConfig(bind={self.bind!r}, port={self.port}, host={self.host!r}, "
            f"username={self.username!r}, password='***', timeout_s={self.timeout_s}, "
            f"heartbeat_interval_s={self.heartbeat_interval_s})"
        )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ProxyConfig:
        """Build a config from ``HG659_*`` environment variables.

        Unset variables keep the built-in defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        return cls(
            bind=env.get(ENV_BIND, DEFAULT_BIND),
            port=int(env.get(ENV_PORT, DEFAULT_PORT)),
            host=env.get(ENV_HOST, DEFAULT_HOST),
            username=env.get(ENV_USERNAME, DEFAULT_USERNAME),
            password=env.get(ENV_PASSWORD, ""),
            timeout_s=float(env.get(ENV_TIMEOUT, DEFAULT_TIMEOUT_S)),
            heartbeat_interval_s=float(
                env.get(ENV_HEARTBEAT_INTERVAL, DEFAULT_HEARTBEAT_INTERVAL_S)
            ),
        )
