"""Base HTML parsing utilities shared across all parsers."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from hg659.client.errors import HG659ProtocolError


def parse_html(html: str | bytes, parser: str = "lxml") -> BeautifulSoup:
    """Parse an HTML document and return a BeautifulSoup document.

    Args:
        html: Raw HTML content from the device response.  Bytes are passed
            through so BeautifulSoup can sniff the document encoding.
        parser: Parser library to use (default: ``lxml``).

    Returns:
        Parsed BeautifulSoup document.

    Raises:
        HG659ProtocolError: If the parser rejects the markup.
    """
    try:
        return BeautifulSoup(html, parser)
    except ParserRejectedMarkup as exc:
        raise HG659ProtocolError(f"Unparsable HTML document: {exc}") from exc


def attr_text(tag: Tag, name: str) -> str | None:
    """Return attribute *name* of *tag* as a single string.

    Multi-valued attributes (``class``, ``rel``...) come back from
    BeautifulSoup as lists; they are joined with a space.
    """
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)
