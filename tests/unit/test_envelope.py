"""Unit tests for hg659.parser.envelope."""

from __future__ import annotations

import pathlib

import pytest

from hg659.client.errors import HG659ProtocolError
from hg659.parser.envelope import decode_json, unwrap

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# unwrap
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "inner",
    [b"", b"{}", b'{"a": 1}', b"[1, 2, 3]", b"anything at all"],
)
def test_unwrap_returns_enclosed_bytes(inner: bytes) -> None:
    assert unwrap(b"/*" + inner + b"*/") == inner


def test_unwrap_device_prefix() -> None:
    assert unwrap(b'while(1); /*{"errcode":0}*/') == b'{"errcode":0}'


def test_unwrap_ignores_trailing_bytes() -> None:
    assert unwrap(b"/*{}*/\n") == b"{}"


def test_unwrap_no_markers_returns_input() -> None:
    data = b'{"errcode": 0}'
    assert unwrap(data) is data


def test_unwrap_only_open_marker_returns_input() -> None:
    assert unwrap(b"/*{}") == b"/*{}"


def test_unwrap_only_close_marker_returns_input() -> None:
    assert unwrap(b"{}*/") == b"{}*/"


def test_unwrap_uses_first_occurrences() -> None:
    assert unwrap(b"/*a*/b*/") == b"a"
    assert unwrap(b"/*a/*b*/") == b"a/*b"


def test_unwrap_close_before_open_is_literal_slice() -> None:
    # start=3, end=0 → data[5:0] == b""
    assert unwrap(b"*/x/*y") == b""


def test_unwrap_empty_input() -> None:
    assert unwrap(b"") == b""


# ---------------------------------------------------------------------------
# decode_json
# ---------------------------------------------------------------------------

def test_decode_json_wrapped_fixture() -> None:
    data = (FIXTURES / "deviceinfo.txt").read_bytes()
    payload = decode_json(data, "/api/system/deviceinfo")
    assert payload["DeviceName"] == "HG659"


def test_decode_json_unwrapped_body() -> None:
    assert decode_json(b'{"errcode": 0}', "/x") == {"errcode": 0}


def test_decode_json_invalid_raises_protocol_error() -> None:
    with pytest.raises(HG659ProtocolError) as exc_info:
        decode_json(b"<html>login</html>", "/api/system/heartbeat")
    assert "/api/system/heartbeat" in str(exc_info.value)


def test_decode_json_misordered_markers_raises_protocol_error() -> None:
    with pytest.raises(HG659ProtocolError):
        decode_json(b'*/{"a":1}/*', "/x")
