"""Local development server.

Starts a pounce ASGI server with the Router wrapped in a LocalBridge.
Each connection is handled by its own task; the router is frozen
before the first one is accepted.
"""

import logging

from funcroute.config import ServerConfig
from funcroute.routing.router import Router
from funcroute.server.bridge import LocalBridge

logger = logging.getLogger("funcroute.server")


def run_local_server(router: Router, config: ServerConfig | None = None) -> None:
    """Serve *router* on ``config.host:config.port`` until interrupted.

    Args:
        router: A configured Router. Registration must be complete.
        config: Bind address. Defaults to
            ``ServerConfig.from_env()`` (``HOST``, ``PORT``, ``LOG_LEVEL``).
    """
    from pounce.config import ServerConfig as PounceConfig
    from pounce.server import Server

    cfg = config or ServerConfig.from_env()
    router.freeze()

    logger.info("Starting local server on %s:%d", cfg.host, cfg.port)
    pounce_config = PounceConfig(
        host=cfg.host,
        port=cfg.port,
        workers=1,
    )
    Server(pounce_config, LocalBridge(router)).run()
