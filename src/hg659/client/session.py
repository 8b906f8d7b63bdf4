"""Authenticated HTTP session for HG659 routers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from hg659.client.auth import build_login_request
from hg659.client.errors import ERRCODE_OK, HG659AuthError
from hg659.client.http import HG659HTTP
from hg659.model.csrf import CSRFPair
from hg659.model.device import DeviceInfo
from hg659.model.host import Host
from hg659.parser.csrf import csrf_from_json, extract_csrf
from hg659.parser.device import parse_device_info
from hg659.parser.envelope import decode_json
from hg659.parser.host import parse_hosts
from hg659.vendor.huawei.endpoints import (
    DEVICE_INFO,
    HEARTBEAT,
    HOST_INFO,
    ROOT,
    USER_LOGIN,
)
from hg659.vendor.huawei.mappings import (
    ERROR_CATEGORY_KEY,
    ERROR_CATEGORY_OK,
    ERROR_CODE_KEY,
    ERROR_COUNT_KEY,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HG659Credentials:
    """Immutable credential pair for an HG659 router.

    Args:
        username: Login username.
        password: Plaintext login password (hashed per request).
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"HG659Credentials(username={self.username!r}, password='***')"


class HG659Session:
    """Manages one cookie-bearing, CSRF-tracking session to an HG659 router.

    Wraps :class:`.HG659HTTP` and adds:
    - Bootstrap: fetch the landing page for the session cookie and CSRF pair.
    - Login with the vendor password hash bound to the current CSRF pair.
    - CSRF rotation whenever a JSON response carries a fresh pair.
    - Envelope unwrapping and typed reads (device info, hosts).

    There is no logout and no automatic re-login: callers that see an
    :exc:`.HG659AuthError` (or an unexpected body) on a normally
    authenticated call should run :meth:`open` again.

    Args:
        base_url: Device host or base URL, e.g. ``192.168.1.1``.
        credentials: Username/password pair.
        timeout_s: Request timeout in seconds (default 30).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        credentials: HG659Credentials,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
    ) -> None:
        self._http: HG659HTTP = HG659HTTP(
            base_url=base_url,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self._credentials: HG659Credentials = credentials
        self._csrf: CSRFPair | None = None
        self._authenticated: bool = False
        # Guards _csrf and the cookie jar; login rewrites both.
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def bootstrap(self) -> CSRFPair:
        """Fetch the landing page and capture the session cookie and CSRF pair.

        Cookies set by the response are kept only when the jar was empty
        beforehand, so re-bootstrapping never clobbers an established
        session.

        Returns:
            The CSRF pair now in effect.

        Raises:
            HG659ConnectionError: If the device is unreachable.
            HG659ProtocolError: If the landing page cannot be parsed.
        """
        with self._lock:
            previous = self._http.cookies.copy() if len(self._http.cookies) else None
            try:
                resp = self._http.get(ROOT)
            finally:
                # requests stores Set-Cookie even when the status is an error
                if previous is not None:
                    self._http.cookies = previous
            self._csrf = extract_csrf(resp.content)
            logger.debug(
                "Bootstrapped %s (csrf complete=%s)",
                self._http.base_url,
                self._csrf.is_complete,
            )
            return self._csrf

    def login(self) -> None:
        """Authenticate with the configured credentials.

        Bootstraps first if no CSRF pair is held yet.

        Raises:
            HG659AuthError: If the device reports a login failure.
            HG659ProtocolError: If the response cannot be decoded as JSON.
        """
        with self._lock:
            csrf = self._csrf
            if csrf is None or not csrf.is_complete:
                csrf = self.bootstrap()
            request = build_login_request(
                self._credentials.username,
                self._credentials.password,
                csrf,
            )
            result = self._do_post(USER_LOGIN, request.to_dict())
            self._authenticated = False
            _check_login_result(result)
            self._authenticated = True
            logger.debug(
                "Logged in to %s as %r",
                self._http.base_url,
                self._credentials.username,
            )

    def open(self) -> None:
        """Bootstrap a fresh CSRF pair and log in."""
        with self._lock:
            self.bootstrap()
            self.login()

    def heartbeat(self) -> Any:
        """Send a keep-alive request and return the decoded payload.

        Errors propagate unchanged; the session state is left as is.
        """
        return self.get(HEARTBEAT)

    # ------------------------------------------------------------------
    # Typed reads
    # ------------------------------------------------------------------

    def get_device_info(self) -> DeviceInfo:
        """Return identity, model, firmware and uptime of the router."""
        return parse_device_info(self.get(DEVICE_INFO))

    def get_hosts(self) -> list[Host]:
        """Return the hosts currently known to the router.

        Raises:
            HG659ParseError: If any host record has a malformed MAC or IP.
        """
        hosts = parse_hosts(self.get(HOST_INFO))
        logger.debug("Parsed %d host(s) from %s", len(hosts), HOST_INFO)
        return hosts

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def get(self, path: str) -> Any:
        """Perform a GET and return the unwrapped, decoded JSON payload."""
        resp = self._http.get(path)
        return decode_json(resp.content, path)

    def post(self, path: str, data: Any) -> Any:
        """Perform a CSRF-signed POST and return the decoded JSON payload.

        The body is ``{"csrf": <current pair>, "data": data}``.

        Raises:
            HG659AuthError: If no complete CSRF pair is held.
        """
        with self._lock:
            return self._do_post(path, data)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._authenticated = False
        self._http.close()

    def __enter__(self) -> HG659Session:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def csrf(self) -> CSRFPair | None:
        """The CSRF pair currently in effect (``None`` before bootstrap)."""
        return self._csrf

    @property
    def authenticated(self) -> bool:
        """True if the last login succeeded."""
        return self._authenticated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _do_post(self, path: str, data: Any) -> Any:
        """Send one signed POST, decode it and apply any CSRF rotation."""
        if self._csrf is None or not self._csrf.is_complete:
            raise HG659AuthError(
                f"Missing or incomplete CSRF pair; bootstrap before POST {path!r}"
            )
        resp = self._http.post_json(path, {"csrf": self._csrf.to_dict(), "data": data})
        result = decode_json(resp.content, path)
        rotated = csrf_from_json(result)
        if rotated is not None and rotated.is_complete and rotated != self._csrf:
            logger.debug("CSRF pair rotated by %s", path)
            self._csrf = rotated
        return result


def _check_login_result(result: Any) -> None:
    """Raise :exc:`.HG659AuthError` unless *result* reports a successful login."""
    if not isinstance(result, dict):
        raise HG659AuthError("unknown error")
    category = result.get(ERROR_CATEGORY_KEY)
    if category != ERROR_CATEGORY_OK:
        count = result.get(ERROR_COUNT_KEY)
        raise HG659AuthError(
            str(category or ""),
            category=str(category or ""),
            count=count if isinstance(count, int) else None,
        )
    errcode = result.get(ERROR_CODE_KEY, ERRCODE_OK)
    if isinstance(errcode, int) and errcode != ERRCODE_OK:
        raise HG659AuthError("unknown error")
