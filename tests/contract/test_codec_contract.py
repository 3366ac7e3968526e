"""Contract tests for method-call decoding and envelope encoding."""

from __future__ import annotations

import json

import pytest

from gonative.utils.json_utils import (
    InvalidCallError,
    decode_method_call,
    encode_envelope,
    error_envelope,
    parse_arguments,
)


def test_decode_method_call_accepts_aliases() -> None:
    assert decode_method_call('{"method": "op", "arguments": {"data": 1}}') == ("op", {"data": 1})
    assert decode_method_call('{"name": " op ", "args": {"data": 2}}') == ("op", {"data": 2})
    assert decode_method_call('{"method": "op"}') == ("op", {})


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2]",
        '{"arguments": {}}',
        '{"method": ""}',
        '{"method": "op", "arguments": [1]}',
    ],
)
def test_decode_method_call_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidCallError):
        decode_method_call(text)


def test_parse_arguments() -> None:
    assert parse_arguments(None) == {}
    assert parse_arguments("  ") == {}
    assert parse_arguments('{"data": 3}') == {"data": 3}
    with pytest.raises(InvalidCallError):
        parse_arguments("[3]")


def test_encode_error_envelope() -> None:
    text = encode_envelope(error_envelope("invalidCall", "bad"))
    assert json.loads(text) == {
        "ok": False,
        "kind": "error",
        "code": "invalidCall",
        "message": "bad",
        "details": None,
    }


def test_deeply_nested_payloads_are_invalid_calls() -> None:
    deep = "[" * 200_000 + "]" * 200_000
    with pytest.raises(InvalidCallError, match="nested too deeply"):
        decode_method_call('{"method": "op", "arguments": {"data": ' + deep + "}}")
    with pytest.raises(InvalidCallError, match="nested too deeply"):
        parse_arguments('{"data": ' + deep + "}")
