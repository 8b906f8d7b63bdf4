"""Parser for the HG659 device information payload (deviceinfo)."""

from __future__ import annotations

from typing import Any

from hg659.client.errors import HG659ProtocolError
from hg659.model.device import DeviceInfo
from hg659.vendor.huawei.mappings import DEVICE_INFO_FIELDS


def parse_device_info(payload: Any) -> DeviceInfo:
    """Map a decoded ``deviceinfo`` payload to a :class:`.DeviceInfo`.

    Absent keys fall back to empty strings / zero, as the firmware omits
    fields it does not know (e.g. serial number on refurbished units).

    Args:
        payload: Decoded JSON object from ``/api/system/deviceinfo``.

    Returns:
        Populated :class:`.DeviceInfo` instance.

    Raises:
        HG659ProtocolError: If *payload* is not a JSON object or a field has
            the wrong type.
    """
    if not isinstance(payload, dict):
        raise HG659ProtocolError(
            f"Expected a JSON object for device info, got {type(payload).__name__}"
        )
    oui = _str_field(payload, DEVICE_INFO_FIELDS["oui"])
    serial = _str_field(payload, DEVICE_INFO_FIELDS["serial"])
    name = _str_field(payload, DEVICE_INFO_FIELDS["name"])
    hw_version = _str_field(payload, DEVICE_INFO_FIELDS["hardware_version"])
    return DeviceInfo(
        device_id=f"{oui}-{serial}",
        model=f"{name} {hw_version}",
        version=_str_field(payload, DEVICE_INFO_FIELDS["software_version"]),
        uptime=_int_field(payload, DEVICE_INFO_FIELDS["uptime"]),
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _str_field(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key, "")
    if not isinstance(value, str):
        raise HG659ProtocolError(f"Field {key!r} is not a string: {value!r}")
    return value


def _int_field(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key, 0)
    # bool is an int subclass; the firmware never sends one here
    if isinstance(value, bool) or not isinstance(value, int):
        raise HG659ProtocolError(f"Field {key!r} is not an integer: {value!r}")
    return value
