"""JSON helpers for decoding method calls and encoding result envelopes.

These are standalone functions with no dependencies on other bridge modules.
"""

import json
from typing import Any

_NAME_KEYS = ("method", "name")
_ARGUMENT_KEYS = ("arguments", "args")


class InvalidCallError(ValueError):
    """Raised when a method-call payload cannot be decoded."""


def parse_arguments(text: str | None) -> dict[str, Any]:
    """Parse a JSON object of call arguments; empty input yields ``{}``."""
    raw = (text or "").strip()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidCallError(f"arguments are not valid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise InvalidCallError("arguments are nested too deeply") from exc
    if not isinstance(parsed, dict):
        raise InvalidCallError("arguments must be a JSON object")
    return parsed


def decode_method_call(text: str) -> tuple[str, dict[str, Any]]:
    """Decode ``{"method": ..., "arguments": {...}}`` into ``(name, arguments)``.

    ``name`` and ``args`` are accepted as aliases. Missing arguments decode to
    an empty mapping; a non-object ``arguments`` value is rejected.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidCallError(f"call is not valid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise InvalidCallError("call is nested too deeply") from exc
    if not isinstance(payload, dict):
        raise InvalidCallError("call must be a JSON object")

    name = next((payload[k] for k in _NAME_KEYS if k in payload), None)
    if not isinstance(name, str) or not name.strip():
        raise InvalidCallError("call is missing a 'method' name")

    arguments = next((payload[k] for k in _ARGUMENT_KEYS if k in payload), None)
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidCallError("'arguments' must be a JSON object")
    return name.strip(), arguments


def encode_envelope(envelope: dict[str, Any]) -> str:
    return json.dumps(envelope, ensure_ascii=False, sort_keys=True)


def error_envelope(code: str, message: str) -> dict[str, Any]:
    return {"ok": False, "kind": "error", "code": code, "message": message, "details": None}
