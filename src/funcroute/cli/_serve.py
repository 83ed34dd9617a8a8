"""``funcroute serve`` — run a router behind the local bridge."""

import argparse
import logging
import sys
from dataclasses import replace

from funcroute.cli._resolve import resolve_router
from funcroute.config import ServerConfig
from funcroute.errors import ConfigurationError


def run_serve(args: argparse.Namespace) -> None:
    """Resolve ``args.router`` and serve it.

    Settings come from ``HOST``/``PORT``/``LOG_LEVEL``; CLI flags win.
    """
    try:
        router = resolve_router(args.router)
        config = ServerConfig.from_env()
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = replace(
        config,
        host=args.host or config.host,
        port=args.port or config.port,
        log_level=(args.log_level or config.log_level).lower(),
    )
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from funcroute.server.local import run_local_server

    run_local_server(router, config)
