"""Custom exceptions for the hg659 HTTP client."""

from __future__ import annotations

# Device JSON error code for a successful call
ERRCODE_OK: int = 0


class HG659Error(Exception):
    """Base exception for all hg659 errors."""


class HG659ConnectionError(HG659Error):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class HG659ResponseError(HG659Error):
    """Raised when the device returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url!r}")


class HG659ProtocolError(HG659Error):
    """Raised when a response body is not the HTML/JSON the device should send."""


class HG659AuthError(HG659Error):
    """Raised when the device rejects a login.

    Attributes:
        category: Raw ``errorCategory`` reported by the device, if any.
        count: Failed-attempt counter reported alongside the category, if any.
    """

    def __init__(
        self,
        message: str,
        category: str | None = None,
        count: int | None = None,
    ) -> None:
        self.category = category
        self.count = count
        super().__init__(message)


class HG659ParseError(HG659Error):
    """Raised when a host or device record holds a malformed value."""
