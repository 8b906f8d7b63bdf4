"""Typed model for device information returned by deviceinfo."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class DeviceInfo:
    """General device information reported by the router.

    Attributes:
        device_id: ``<ManufacturerOUI>-<SerialNumber>`` (e.g. ``00E0FC-ABC123``).
        model: ``<DeviceName> <HardwareVersion>`` (e.g. ``HG659 VER.A``).
        version: Firmware / software version string.
        uptime: Seconds since the device booted.
    """

    device_id: str
    model: str
    version: str
    uptime: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
