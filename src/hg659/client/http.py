"""Transport for the HG659 web management interface.

The router speaks plain HTTP on the LAN side.  This module owns the one
:class:`requests.Session` per device (and so the ``SessionID_R3`` cookie the
firmware issues on the landing page) and turns transport failures and
error statuses into :mod:`.errors` types.  Envelope unwrapping and CSRF
handling live above it, in :mod:`.session`.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any

import requests

from hg659.client.errors import HG659ConnectionError, HG659ResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("hg659")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"hg659/{_VERSION}"


def _normalise_base_url(url: str) -> str:
    """Accept a bare router address (``192.168.1.1``) or a full URL."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url


class HG659HTTP:
    """Cookie-keeping HTTP transport scoped to one router.

    Args:
        base_url: Router address or URL, e.g. ``192.168.1.1``.
        timeout_s: Per-request timeout in seconds (default 30).
        verify_tls: Verify certificates when the URL is ``https`` (default True).
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._session: requests.Session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, path: str) -> requests.Response:
        """Fetch a page or API resource (landing page, deviceinfo, HostInfo...).

        Raises:
            HG659ConnectionError: If the router cannot be reached.
            HG659ResponseError: If the router answers with a non-2xx status.
        """
        return self._request("GET", path)

    def post_json(self, path: str, payload: dict[str, Any]) -> requests.Response:
        """POST *payload* as ``application/json``.

        The router expects the ``{"csrf": ..., "data": ...}`` envelope; building
        it is the caller's job.

        Raises:
            HG659ConnectionError: If the router cannot be reached.
            HG659ResponseError: If the router answers with a non-2xx status.
        """
        return self._request("POST", path, json=payload)

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        """Cookies held for the router (normally just the session ID)."""
        return self._session.cookies

    @cookies.setter
    def cookies(self, jar: requests.cookies.RequestsCookieJar) -> None:
        self._session.cookies = jar

    def close(self) -> None:
        """Release pooled connections to the router."""
        self._session.close()

    def __enter__(self) -> HG659HTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                timeout=self.timeout_s,
                verify=self.verify_tls,
                **kwargs,
            )
        except requests.exceptions.RequestException as exc:
            raise HG659ConnectionError(url, exc) from exc
        if not resp.ok:
            raise HG659ResponseError(resp.status_code, resp.url)
        return resp
