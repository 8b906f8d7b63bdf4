"""Typed model for hosts known to the router (HostInfo)."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Host:
    """A device seen on the LAN or WLAN.

    Attributes:
        name: Host name with the firmware's ``_Wireless``/``_Ethernet``
              suffix removed.
        is_connected: Whether the host is currently online.
        mac_address: Hardware address, lower-case colon-separated.
        ip_addresses: IPv4 address (if any) followed by all IPv6 addresses.
        interface_name: Layer 2 interface the host was seen on.
        lease_time: Remaining DHCP lease time in seconds.
    """

    name: str
    is_connected: bool
    mac_address: str
    ip_addresses: list[ipaddress.IPv4Address | ipaddress.IPv6Address] = field(
        default_factory=list
    )
    interface_name: str = ""
    lease_time: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "is_connected": self.is_connected,
            "mac_address": self.mac_address,
            "ip_addresses": [str(ip) for ip in self.ip_addresses],
            "interface_name": self.interface_name,
            "lease_time": self.lease_time,
        }
