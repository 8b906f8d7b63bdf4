"""Password hashing for the HG659 ``user_login`` call.

The web UI hashes the password in the browser before sending it::

    sha256_hex(username + base64(sha256_hex(password)) + csrf_param + csrf_token)

The result is bound to the CSRF pair in effect when the request is sent, so a
captured hash cannot be replayed once the pair rotates.
"""

from __future__ import annotations

import base64
import hashlib

from hg659.model.csrf import CSRFPair, LoginRequest


def sha256_hex(data: str) -> str:
    """Return the lower-case hex SHA-256 digest of the UTF-8 bytes of *data*."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def b64encode_str(data: str) -> str:
    """Standard-alphabet, padded Base64 of the UTF-8 bytes of *data*."""
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def hash_password(username: str, password: str, csrf: CSRFPair) -> str:
    """Derive the login password hash.

    Args:
        username: Login username.
        password: Plaintext password.
        csrf: CSRF pair that will accompany the login request.

    Returns:
        64-character lower-case hex string.
    """
    return sha256_hex(
        username + b64encode_str(sha256_hex(password)) + csrf.param + csrf.token
    )


def build_login_request(username: str, password: str, csrf: CSRFPair) -> LoginRequest:
    """Build the ``user_login`` payload for *csrf*."""
    return LoginRequest(
        username=username,
        password=hash_password(username, password, csrf),
    )
