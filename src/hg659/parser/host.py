"""Parser for the HG659 connected-host list (HostInfo)."""

from __future__ import annotations

import ipaddress
import re
from typing import Any

from hg659.client.errors import HG659ParseError, HG659ProtocolError
from hg659.model.host import Host
from hg659.vendor.huawei.mappings import (
    HOST_ACTIVE_KEY,
    HOST_INTERFACE_KEY,
    HOST_IPV4_KEY,
    HOST_IPV6_ADDR_KEY,
    HOST_IPV6_LIST_KEY,
    HOST_LEASE_KEY,
    HOST_MAC_KEY,
    HOST_NAME_KEY,
    HOST_NAME_SUFFIXES,
)

# MAC-48 / EUI-64: XX:XX:... or XX-XX-... (6 or 8 octets)
_MAC_SEP_RE: re.Pattern[str] = re.compile(
    r"^[0-9a-fA-F]{2}(?P<sep>[:\-])(?:[0-9a-fA-F]{2}(?P=sep)){4}"
    r"(?:(?:[0-9a-fA-F]{2}(?P=sep)){2})?[0-9a-fA-F]{2}$"
)

# Dotted form: XXXX.XXXX.XXXX (or four groups for EUI-64)
_MAC_DOT_RE: re.Pattern[str] = re.compile(
    r"^[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}\.[0-9a-fA-F]{4}(?:\.[0-9a-fA-F]{4})?$"
)

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def parse_hosts(payload: Any) -> list[Host]:
    """Map a decoded ``HostInfo`` payload to a list of :class:`.Host`.

    Args:
        payload: Decoded JSON array from ``/api/system/HostInfo``.

    Returns:
        One :class:`.Host` per record, in device order.

    Raises:
        HG659ProtocolError: If *payload* is not a JSON array of objects.
        HG659ParseError: If any record holds a malformed MAC or IP address.
            No partial list is returned.
    """
    if not isinstance(payload, list):
        raise HG659ProtocolError(
            f"Expected a JSON array for host info, got {type(payload).__name__}"
        )
    return [_parse_host(record) for record in payload]


def strip_host_suffix(name: str) -> str:
    """Remove the first matching firmware suffix from *name*.

    ``"PC_Wireless"`` → ``"PC"``, ``"PC_Ethernet"`` → ``"PC"``;
    other names are returned unchanged.
    """
    for suffix in HOST_NAME_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def parse_mac(raw: str) -> str:
    """Validate *raw* as a hardware address and return it lower-case with colons.

    Raises:
        HG659ParseError: If *raw* is not a MAC-48 / EUI-64 literal.
    """
    if _MAC_SEP_RE.match(raw):
        digits = raw.replace(":", "").replace("-", "")
    elif _MAC_DOT_RE.match(raw):
        digits = raw.replace(".", "")
    else:
        raise HG659ParseError(f"Malformed MAC address: {raw!r}")
    digits = digits.lower()
    return ":".join(digits[i:i + 2] for i in range(0, len(digits), 2))


def parse_ipv4(raw: str) -> ipaddress.IPv4Address:
    """Parse an IPv4 literal, raising :exc:`.HG659ParseError` if malformed."""
    try:
        return ipaddress.IPv4Address(raw)
    except ValueError as exc:
        raise HG659ParseError(f"Malformed IPv4 address: {raw!r}") from exc


def parse_ip(raw: str) -> IPAddress:
    """Parse an IPv4 or IPv6 literal, raising :exc:`.HG659ParseError` if malformed."""
    try:
        return ipaddress.ip_address(raw)
    except ValueError as exc:
        raise HG659ParseError(f"Malformed IP address: {raw!r}") from exc


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _parse_host(record: Any) -> Host:
    if not isinstance(record, dict):
        raise HG659ProtocolError(f"Host record is not a JSON object: {record!r}")

    addrs: list[IPAddress] = []
    ipv4 = str(record.get(HOST_IPV4_KEY) or "")
    if ipv4:
        addrs.append(parse_ipv4(ipv4))
    for entry in record.get(HOST_IPV6_LIST_KEY) or []:
        if not isinstance(entry, dict):
            raise HG659ProtocolError(f"IPv6 entry is not a JSON object: {entry!r}")
        addrs.append(parse_ip(str(entry.get(HOST_IPV6_ADDR_KEY, ""))))

    return Host(
        name=strip_host_suffix(str(record.get(HOST_NAME_KEY, ""))),
        is_connected=_active(record.get(HOST_ACTIVE_KEY, False)),
        mac_address=parse_mac(str(record.get(HOST_MAC_KEY, ""))),
        ip_addresses=addrs,
        interface_name=str(record.get(HOST_INTERFACE_KEY, "")),
        lease_time=_lease_time(record.get(HOST_LEASE_KEY)),
    )


def _active(value: Any) -> bool:
    # JSON true/false only; "false" must not read as connected
    if not isinstance(value, bool):
        raise HG659ProtocolError(f"Active flag is not a boolean: {value!r}")
    return value


def _lease_time(value: Any) -> int:
    if value in (None, ""):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise HG659ProtocolError(f"Lease time is not an integer: {value!r}") from exc
