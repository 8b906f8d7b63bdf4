"""Unit tests for hg659.parser.device and hg659.model.device."""

from __future__ import annotations

import pathlib

import pytest

from hg659.client.errors import HG659ProtocolError
from hg659.model.device import DeviceInfo
from hg659.parser.device import parse_device_info
from hg659.parser.envelope import decode_json

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"


def _fixture_payload() -> dict[str, object]:
    data = (FIXTURES / "deviceinfo.txt").read_bytes()
    payload: dict[str, object] = decode_json(data, "/api/system/deviceinfo")
    return payload


# ---------------------------------------------------------------------------
# Fixture-based tests
# ---------------------------------------------------------------------------

def test_fixture_device_id() -> None:
    info = parse_device_info(_fixture_payload())
    assert info.device_id == "00E0FC-J8W7S16A12345678"


def test_fixture_model() -> None:
    info = parse_device_info(_fixture_payload())
    assert info.model == "HG659 VER.A"


def test_fixture_version() -> None:
    info = parse_device_info(_fixture_payload())
    assert info.version == "V100R001C206B020"


def test_fixture_uptime() -> None:
    info = parse_device_info(_fixture_payload())
    assert info.uptime == 86461


# ---------------------------------------------------------------------------
# Field composition
# ---------------------------------------------------------------------------

def test_identifier_and_model_composition() -> None:
    info = parse_device_info(
        {
            "ManufacturerOUI": "001122",
            "SerialNumber": "XYZ",
            "DeviceName": "HG659",
            "HardwareVersion": "v2",
            "SoftwareVersion": "1.0",
            "UpTime": 5,
        }
    )
    assert info == DeviceInfo(device_id="001122-XYZ", model="HG659 v2", version="1.0", uptime=5)


def test_missing_fields_use_zero_values() -> None:
    info = parse_device_info({})
    assert info == DeviceInfo(device_id="-", model=" ", version="", uptime=0)


def test_unknown_fields_ignored() -> None:
    info = parse_device_info({"DeviceName": "HG659", "ProductClass": "x", "UpTime": 1})
    assert info.model == "HG659 "


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_non_object_payload_raises() -> None:
    with pytest.raises(HG659ProtocolError):
        parse_device_info([])


def test_non_integer_uptime_raises() -> None:
    with pytest.raises(HG659ProtocolError):
        parse_device_info({"UpTime": "ten"})


def test_non_string_serial_raises() -> None:
    with pytest.raises(HG659ProtocolError):
        parse_device_info({"SerialNumber": 1234})


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

def test_device_info_to_dict() -> None:
    info = DeviceInfo(device_id="a-b", model="m v", version="1", uptime=3)
    assert info.to_dict() == {
        "device_id": "a-b",
        "model": "m v",
        "version": "1",
        "uptime": 3,
    }
