"""Typed models for the anti-forgery pair and the login request."""

from __future__ import annotations

from dataclasses import dataclass

from hg659.vendor.huawei.mappings import (
    CSRF_PARAM_META,
    CSRF_TOKEN_META,
    LOGIN_PASSWORD_KEY,
    LOGIN_USERNAME_KEY,
)


@dataclass(frozen=True)
class CSRFPair:
    """Anti-forgery parameter name and token embedded in the device HTML.

    Attributes:
        param: Value of the ``csrf_param`` meta tag.
        token: Value of the ``csrf_token`` meta tag.
    """

    param: str = ""
    token: str = ""

    @property
    def is_complete(self) -> bool:
        """True if both fields are non-empty (required before any POST)."""
        return bool(self.param and self.token)

    def to_dict(self) -> dict[str, str]:
        return {CSRF_PARAM_META: self.param, CSRF_TOKEN_META: self.token}


@dataclass(frozen=True)
class LoginRequest:
    """Payload of ``user_login``.

    Attributes:
        username: Login username, sent in clear.
        password: Hex SHA-256 password hash bound to one CSRF pair.
    """

    username: str
    password: str

    def to_dict(self) -> dict[str, str]:
        return {LOGIN_USERNAME_KEY: self.username, LOGIN_PASSWORD_KEY: self.password}
