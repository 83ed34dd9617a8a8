"""Router and local server configuration.

Both are frozen dataclasses — immutable after creation, no string-key
dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from funcroute.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router behaviour. Immutable after creation::

        config = RouterConfig(strip_trailing_slash=False)
    """

    strip_trailing_slash: bool = True
    logger_name: str = "funcroute.router"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Local bridge server settings."""

    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from ``HOST``, ``PORT`` and ``LOG_LEVEL``.

        Missing variables keep their defaults.

        Raises:
            ConfigurationError: If ``PORT`` is not a valid port number.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_port = env.get("PORT")
        port = defaults.port
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                msg = f"PORT must be an integer, got {raw_port!r}"
                raise ConfigurationError(msg) from None
            if not 0 < port < 65536:
                msg = f"PORT out of range: {port}"
                raise ConfigurationError(msg)

        return cls(
            host=env.get("HOST") or defaults.host,
            port=port,
            log_level=(env.get("LOG_LEVEL") or defaults.log_level).lower(),
        )
