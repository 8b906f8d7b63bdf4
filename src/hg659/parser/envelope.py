"""Unwrapping of the comment-delimited JSON envelope.

The HG659 firmware serves API responses as::

    while(1); /*{"DeviceName":"HG659", ...}*/

The JSON document sits between the first ``/*`` and the first ``*/``.
"""

from __future__ import annotations

import json
from typing import Any

from hg659.client.errors import HG659ProtocolError

_OPEN: bytes = b"/*"
_CLOSE: bytes = b"*/"


def unwrap(data: bytes) -> bytes:
    """Return the bytes between the first ``/*`` and the first ``*/``.

    Indices are taken independently, so a ``*/`` preceding the ``/*``
    yields whatever the literal slice gives (usually ``b""``).  If either
    marker is missing, *data* is returned unchanged.

    Args:
        data: Raw response body.

    Returns:
        The enclosed payload, or *data* itself.
    """
    start = data.find(_OPEN)
    end = data.find(_CLOSE)
    if start == -1 or end == -1:
        return data
    return data[start + len(_OPEN):end]


def decode_json(data: bytes, endpoint: str) -> Any:
    """Unwrap *data* and parse the payload as JSON.

    Raises:
        HG659ProtocolError: If the unwrapped payload is not valid JSON.
    """
    payload = unwrap(data)
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise HG659ProtocolError(
            f"Non-JSON response from {endpoint!r}: {data[:200]!r}"
        ) from exc
