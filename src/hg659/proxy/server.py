"""Local JSON proxy re-serving HG659 reads.

Routes::

    GET /       → device info object
    GET /hosts  → array of host objects

A background worker keeps the device session alive with heartbeat calls and
re-opens it (bootstrap + login) when a heartbeat fails.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlparse

from hg659.client.errors import HG659Error
from hg659.client.session import HG659Credentials, HG659Session
from hg659.proxy.config import ProxyConfig

logger = logging.getLogger(__name__)


class ProxyServer:
    """Owns one :class:`.HG659Session` and serves it over local HTTP.

    All device calls go through a single lock so the session sees one
    request at a time.

    Args:
        config: Listener, device and credential settings.
        session: Pre-built session (tests); built from *config* when omitted.
    """

    def __init__(
        self,
        config: ProxyConfig,
        session: HG659Session | None = None,
    ) -> None:
        self.config = config
        self.session: HG659Session = session or HG659Session(
            base_url=config.host,
            credentials=HG659Credentials(config.username, config.password),
            timeout_s=config.timeout_s,
        )
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._httpd: ThreadingHTTPServer | None = None
        self._keepalive: threading.Thread | None = None
        self._serving: bool = False

    # ------------------------------------------------------------------
    # Device calls
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Bootstrap and log in to the device."""
        with self._lock:
            self.session.open()
        logger.info("Logged in to %s", self.session.base_url)

    def device_info(self) -> dict[str, Any]:
        with self._lock:
            return self.session.get_device_info().to_dict()

    def hosts(self) -> list[dict[str, Any]]:
        with self._lock:
            return [host.to_dict() for host in self.session.get_hosts()]

    def keepalive_once(self) -> bool:
        """Send one heartbeat; re-open the session if it fails.

        Returns:
            True if the session is usable afterwards.
        """
        with self._lock:
            try:
                self.session.heartbeat()
                return True
            except HG659Error as exc:
                logger.warning("Heartbeat failed (%s); re-authenticating", exc)
            try:
                self.session.open()
            except HG659Error as exc:
                logger.error("Re-authentication failed: %s", exc)
                return False
        logger.info("Re-authenticated to %s", self.session.base_url)
        return True

    # ------------------------------------------------------------------
    # Listener lifecycle
    # ------------------------------------------------------------------

    def bind(self) -> tuple[str, int]:
        """Create the listening socket and return the bound address."""
        host, port = self._listen().server_address[:2]
        return str(host), int(port)

    def serve_forever(self) -> None:
        """Start the keep-alive worker and serve until :meth:`shutdown`."""
        httpd = self._httpd if self._httpd is not None else self._listen()
        self._start_keepalive()
        host, port = httpd.server_address[:2]
        logger.info("Listening on %s:%d...", host, port)
        self._serving = True
        try:
            httpd.serve_forever()
        finally:
            self._serving = False

    def shutdown(self) -> None:
        """Stop the listener and the keep-alive worker, close the session."""
        self._stop.set()
        if self._httpd is not None:
            if self._serving:
                self._httpd.shutdown()
            self._httpd.server_close()
            self._httpd = None
        if self._keepalive is not None:
            self._keepalive.join(timeout=self.config.timeout_s)
            self._keepalive = None
        self.session.close()

    def _listen(self) -> ThreadingHTTPServer:
        self._httpd = ThreadingHTTPServer(
            (self.config.bind, self.config.port),
            make_handler(self),
        )
        return self._httpd

    def _start_keepalive(self) -> None:
        interval = self.config.heartbeat_interval_s
        if interval <= 0:
            logger.debug("Keep-alive disabled")
            return
        self._keepalive = threading.Thread(
            target=self._keepalive_loop,
            args=(interval,),
            name="hg659-keepalive",
            daemon=True,
        )
        self._keepalive.start()

    def _keepalive_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            self.keepalive_once()


def make_handler(proxy: ProxyServer) -> type[BaseHTTPRequestHandler]:
    """Build a request handler class bound to *proxy*."""

    routes: dict[str, Callable[[], Any]] = {
        "/": proxy.device_info,
        "/hosts": proxy.hosts,
    }

    class _Handler(BaseHTTPRequestHandler):
        server_version = "hg659-proxy"

        def do_GET(self) -> None:  # noqa: N802
            path = urlparse(self.path).path
            route = routes.get(path)
            if route is None:
                self._send_json(404, {"error": f"not found: {path}"})
                return
            try:
                body = route()
            except HG659Error as exc:
                logger.warning("GET %s failed: %s", path, exc)
                self._send_json(500, {"error": str(exc)})
                return
            self._send_json(200, body)

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            logger.debug("%s - %s", self.address_string(), format % args)

        def _send_json(self, status: int, payload: Any) -> None:
            raw = json.dumps(payload).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(raw)))
            self.end_headers()
            self.wfile.write(raw)

    return _Handler
