"""Unit tests for hg659.parser.host and hg659.model.host."""

from __future__ import annotations

import ipaddress
import pathlib
from typing import Any

import pytest

from hg659.client.errors import HG659ParseError, HG659ProtocolError
from hg659.model.host import Host
from hg659.parser.envelope import decode_json
from hg659.parser.host import parse_hosts, parse_mac, strip_host_suffix

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"


def _record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "HostName": "PC_Wireless",
        "Active46": True,
        "Layer2Interface": "SSID1",
        "MACAddress": "00:11:22:33:44:55",
        "IPAddress": "192.168.1.2",
        "Ipv6Addrs": [],
        "LeaseTime": 100,
    }
    record.update(overrides)
    return record


def _fixture_hosts() -> list[Host]:
    data = (FIXTURES / "hostinfo.txt").read_bytes()
    return parse_hosts(decode_json(data, "/api/system/HostInfo"))


# ---------------------------------------------------------------------------
# strip_host_suffix
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("PC_Wireless", "PC"),
        ("PC_Ethernet", "PC"),
        ("PC", "PC"),
        ("PC_Ethernet_Wireless", "PC_Ethernet"),
        ("PC_Wireless_Ethernet", "PC_Wireless"),
        ("_Wireless", ""),
        ("Wireless", "Wireless"),
    ],
)
def test_strip_host_suffix(raw: str, expected: str) -> None:
    assert strip_host_suffix(raw) == expected


# ---------------------------------------------------------------------------
# parse_mac
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw",
    ["A4:5E:60:11:22:33", "a4-5e-60-11-22-33", "a45e.6011.2233"],
)
def test_parse_mac_normalises(raw: str) -> None:
    assert parse_mac(raw) == "a4:5e:60:11:22:33"


def test_parse_mac_eui64() -> None:
    assert parse_mac("02:00:5E:10:00:00:00:01") == "02:00:5e:10:00:00:00:01"


@pytest.mark.parametrize(
    "raw",
    ["", "00:11:22:33:44", "00:11:22:33:44:GG", "00:11-22:33:44:55", "001122334455"],
)
def test_parse_mac_rejects_malformed(raw: str) -> None:
    with pytest.raises(HG659ParseError):
        parse_mac(raw)


# ---------------------------------------------------------------------------
# Fixture-based tests
# ---------------------------------------------------------------------------

def test_fixture_host_count() -> None:
    assert len(_fixture_hosts()) == 3


def test_fixture_wireless_host() -> None:
    host = _fixture_hosts()[0]
    assert host.name == "laptop"
    assert host.is_connected is True
    assert host.mac_address == "a4:5e:60:11:22:33"
    assert host.interface_name == "SSID1"
    assert host.lease_time == 86000
    assert host.ip_addresses == [
        ipaddress.IPv4Address("192.168.1.100"),
        ipaddress.IPv6Address("fe80::a65e:60ff:fe11:2233"),
        ipaddress.IPv6Address("2001:db8::100"),
    ]


def test_fixture_ethernet_host() -> None:
    host = _fixture_hosts()[1]
    assert host.name == "nas"
    assert host.ip_addresses == [ipaddress.IPv4Address("192.168.1.20")]


def test_fixture_host_without_ipv4() -> None:
    host = _fixture_hosts()[2]
    assert host.name == "printer"
    assert host.is_connected is False
    assert host.ip_addresses == []


# ---------------------------------------------------------------------------
# Record mapping
# ---------------------------------------------------------------------------

def test_empty_list() -> None:
    assert parse_hosts([]) == []


def test_empty_ipv4_excluded() -> None:
    hosts = parse_hosts([_record(IPAddress="", Ipv6Addrs=[{"Ipv6Addr": "::1"}])])
    assert hosts[0].ip_addresses == [ipaddress.IPv6Address("::1")]


def test_missing_ipv6_list_tolerated() -> None:
    record = _record()
    del record["Ipv6Addrs"]
    assert parse_hosts([record])[0].ip_addresses == [ipaddress.IPv4Address("192.168.1.2")]


def test_null_ipv6_list_tolerated() -> None:
    assert len(parse_hosts([_record(Ipv6Addrs=None)])[0].ip_addresses) == 1


# ---------------------------------------------------------------------------
# Errors: no partial results
# ---------------------------------------------------------------------------

def test_malformed_mac_fails_whole_call() -> None:
    records = [_record(), _record(MACAddress="not-a-mac"), _record()]
    with pytest.raises(HG659ParseError):
        parse_hosts(records)


def test_malformed_ipv4_fails_whole_call() -> None:
    with pytest.raises(HG659ParseError):
        parse_hosts([_record(), _record(IPAddress="192.168.1.300")])


def test_ipv6_literal_in_ipv4_field_rejected() -> None:
    with pytest.raises(HG659ParseError):
        parse_hosts([_record(IPAddress="fe80::1")])


def test_malformed_ipv6_fails_whole_call() -> None:
    with pytest.raises(HG659ParseError):
        parse_hosts([_record(Ipv6Addrs=[{"Ipv6Addr": "fe80::zz"}])])


def test_ipv6_entry_without_address_fails() -> None:
    with pytest.raises(HG659ParseError):
        parse_hosts([_record(Ipv6Addrs=[{}])])


def test_non_list_payload_raises_protocol_error() -> None:
    with pytest.raises(HG659ProtocolError):
        parse_hosts({"HostName": "x"})


def test_non_integer_lease_time_raises_protocol_error() -> None:
    with pytest.raises(HG659ProtocolError):
        parse_hosts([_record(LeaseTime="forever")])


@pytest.mark.parametrize("raw", ["false", "true", 1, 0, None])
def test_non_boolean_active_flag_raises_protocol_error(raw: object) -> None:
    with pytest.raises(HG659ProtocolError):
        parse_hosts([_record(Active46=raw)])


def test_missing_active_flag_reads_as_disconnected() -> None:
    record = _record()
    del record["Active46"]
    assert parse_hosts([record])[0].is_connected is False


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

def test_host_to_dict_stringifies_addresses() -> None:
    host = parse_hosts([_record(Ipv6Addrs=[{"Ipv6Addr": "2001:db8::1"}])])[0]
    assert host.to_dict() == {
        "name": "PC",
        "is_connected": True,
        "mac_address": "00:11:22:33:44:55",
        "ip_addresses": ["192.168.1.2", "2001:db8::1"],
        "interface_name": "SSID1",
        "lease_time": 100,
    }
