"""Command-line entry point: ``hg659-proxy``.

Logs in to an HG659 router and re-serves device info and the host list as
local JSON endpoints.  Every flag defaults from an ``HG659_*`` environment
variable, so the password need not appear on the command line::

    export HG659_PASSWORD="your-password"
    hg659-proxy --host 192.168.1.1 --port 8659
"""

from __future__ import annotations

import argparse
import logging
import sys

from hg659.client.errors import HG659Error
from hg659.proxy.config import ProxyConfig
from hg659.proxy.server import ProxyServer

logger = logging.getLogger(__name__)


def _setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(
    argv: list[str] | None = None,
    defaults: ProxyConfig | None = None,
) -> argparse.Namespace:
    """Parse command-line arguments on top of environment *defaults*."""
    base = defaults or ProxyConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="hg659-proxy",
        description="Local JSON proxy for the Huawei HG659 web API.",
    )
    parser.add_argument("--bind", default=base.bind, help="interface to bind")
    parser.add_argument("--port", type=int, default=base.port, help="port to run on")
    parser.add_argument(
        "--host",
        default=base.host,
        help="hostname or IP of the HG659 device",
    )
    parser.add_argument(
        "--user",
        dest="username",
        default=base.username,
        help="username for login",
    )
    parser.add_argument(
        "--pass",
        dest="password",
        default=base.password,
        help="password for login (prefer HG659_PASSWORD)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=base.timeout_s,
        help="request timeout towards the device, in seconds",
    )
    parser.add_argument(
        "--heartbeat-interval",
        type=float,
        default=base.heartbeat_interval_s,
        help="seconds between keep-alive heartbeats (0 disables)",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ProxyConfig:
    return ProxyConfig(
        bind=args.bind,
        port=args.port,
        host=args.host,
        username=args.username,
        password=args.password,
        timeout_s=args.timeout,
        heartbeat_interval_s=args.heartbeat_interval,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the proxy until interrupted.

    Returns:
        Process exit code: 0 on clean shutdown, 1 on configuration or
        login failure.
    """
    try:
        args = parse_args(argv)
        config = build_config(args)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    _setup_logging(args.debug)
    logger.debug("Starting with %r", config)

    proxy = ProxyServer(config)
    try:
        proxy.open()
        proxy.bind()
    except HG659Error as exc:
        logger.error("Cannot log in to %s: %s", config.host, exc)
        proxy.session.close()
        return 1
    except OSError as exc:
        logger.error("Cannot listen on %s:%d: %s", config.bind, config.port, exc)
        proxy.session.close()
        return 1

    try:
        proxy.serve_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
    finally:
        proxy.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
