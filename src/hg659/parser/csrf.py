"""Extraction of the CSRF pair from device HTML and JSON responses."""

from __future__ import annotations

import logging
from typing import Any

from bs4 import Tag

from hg659.model.csrf import CSRFPair
from hg659.parser.html import attr_text, parse_html
from hg659.vendor.huawei.mappings import CSRF_PARAM_META, CSRF_TOKEN_META

logger = logging.getLogger(__name__)

_CSRF_NAMES: frozenset[str] = frozenset({CSRF_PARAM_META, CSRF_TOKEN_META})


def extract_csrf(html: str | bytes) -> CSRFPair:
    """Locate the ``csrf_param`` / ``csrf_token`` meta tags in *html*.

    The landing page carries::

        <meta name="csrf_param" content="...">
        <meta name="csrf_token" content="...">

    Tags are visited in document order and the first match per field wins.
    Missing tags leave the corresponding field empty.

    Args:
        html: Raw HTML of the device landing page.

    Returns:
        The extracted :class:`.CSRFPair` (possibly incomplete).

    Raises:
        HG659ProtocolError: If the document cannot be parsed.
    """
    soup = parse_html(html)
    found: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        pair = _meta_name_value(meta)
        if pair is None:
            continue
        name, value = pair
        if name in _CSRF_NAMES and name not in found:
            found[name] = value
    csrf = CSRFPair(
        param=found.get(CSRF_PARAM_META, ""),
        token=found.get(CSRF_TOKEN_META, ""),
    )
    if not csrf.is_complete:
        logger.debug("CSRF meta tags missing or empty: found %s", sorted(found))
    return csrf


def csrf_from_json(payload: Any) -> CSRFPair | None:
    """Return the CSRF pair carried by a decoded JSON response, if any.

    The device rotates the pair after login and returns the new one as
    top-level ``csrf_param`` / ``csrf_token`` keys.
    """
    if not isinstance(payload, dict):
        return None
    param = payload.get(CSRF_PARAM_META)
    token = payload.get(CSRF_TOKEN_META)
    if not isinstance(param, str) or not isinstance(token, str):
        return None
    return CSRFPair(param=param, token=token)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _meta_name_value(meta: Tag) -> tuple[str, str] | None:
    """Return the (name, value) carried by a ``<meta>`` tag.

    Uses the ``name``/``content`` attributes when both exist.  Otherwise the
    first two attributes are read positionally, matching how the firmware
    itself lays out the tag.
    """
    name = attr_text(meta, "name")
    content = attr_text(meta, "content")
    if name is not None and content is not None:
        return name, content
    keys = list(meta.attrs)
    if len(keys) < 2:
        return None
    first = attr_text(meta, keys[0])
    second = attr_text(meta, keys[1])
    if first is None or second is None:
        return None
    return first, second
