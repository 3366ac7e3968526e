"""Execution log for bridge calls.

One JSON record per event, appended to a per-session JSONL file. Records
written for a call carry the channel name, operation and request id, so the
``bridge_call``, any failure event and the ``bridge_result`` of one request
can be joined.
"""

import json
import os
import threading
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

from gonative.config import EXEC_LOG_DIR, EXEC_LOG_ENABLED, EXEC_LOG_MAX_CHARS

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
_SESSION_ID: str = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
_EXEC_LOG_FILE: Path | None = None
_EXEC_LOG_FAILED: bool = False
_EXEC_LOG_LOCK: threading.Lock = threading.Lock()


def new_request_id() -> str:
    return uuid4().hex[:12]


# ---------------------------------------------------------------------------
# Record shaping
# ---------------------------------------------------------------------------

def _clip(text: str) -> str:
    if EXEC_LOG_MAX_CHARS <= 0 or len(text) <= EXEC_LOG_MAX_CHARS:
        return text
    marker = f"...[truncated:{len(text)}]"
    return text[: max(0, EXEC_LOG_MAX_CHARS - len(marker))] + marker


_MAX_DEPTH = 16


def _loggable(value: Any, depth: int = 0) -> Any:
    """Argument values and result payloads as JSON-safe, clipped data."""
    if depth > _MAX_DEPTH:
        return "...[nested]"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip(value)
    if isinstance(value, bytes):
        return _clip(value.decode("utf-8", errors="replace"))
    if isinstance(value, Mapping):
        return {str(k): _loggable(v, depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_loggable(v, depth + 1) for v in value]
    return _clip(repr(value))


def _call_fields(channel: str, request: Any) -> dict[str, Any]:
    return {
        "channel": channel,
        "operation": request.name,
        "request_id": request.request_id,
    }


# ---------------------------------------------------------------------------
# File handling
# ---------------------------------------------------------------------------

def _log_file() -> Path | None:
    global _EXEC_LOG_FILE, _EXEC_LOG_FAILED
    if not EXEC_LOG_ENABLED or _EXEC_LOG_FAILED:
        return None
    if _EXEC_LOG_FILE is None:
        try:
            EXEC_LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _EXEC_LOG_FAILED = True
            print(f"[warn] execution log disabled, cannot create {EXEC_LOG_DIR}: {exc}")
            return None
        _EXEC_LOG_FILE = (EXEC_LOG_DIR / f"bridge-{_SESSION_ID}-pid{os.getpid()}.jsonl").resolve()
    return _EXEC_LOG_FILE


def _append(record: dict[str, Any]) -> None:
    global _EXEC_LOG_FAILED
    path = _log_file()
    if path is None:
        return
    line = json.dumps(record, ensure_ascii=False)
    try:
        with _EXEC_LOG_LOCK:
            with path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
    except OSError as exc:
        _EXEC_LOG_FAILED = True
        print(f"[warn] execution log disabled, write to {path} failed: {exc}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_exec_log_path() -> str | None:
    path = _log_file()
    return str(path) if path else None


def log_event(event: str, **fields: Any) -> None:
    """Append a free-form event (timestamp, session id, event name, *fields*)."""
    if not EXEC_LOG_ENABLED:
        return
    record: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "session_id": _SESSION_ID,
        "event": str(event or "unknown"),
    }
    record.update({k: _loggable(v) for k, v in fields.items()})
    _append(record)


def log_call(channel: str, request: Any) -> None:
    log_event("bridge_call", **_call_fields(channel, request), arguments=request.arguments)


def log_failure(
    channel: str,
    request: Any,
    *,
    event: str,
    error: dict[str, Any],
    exception: str | None = None,
) -> None:
    fields: dict[str, Any] = {"error": error}
    if exception:
        fields["exception"] = exception
    log_event(event, **_call_fields(channel, request), **fields)


def log_result(channel: str, request: Any, result: Any, *, elapsed_ms: float) -> None:
    """Record the outcome of *request*; fields come from the result envelope."""
    envelope = result.to_envelope()
    fields: dict[str, Any] = {
        "kind": envelope["kind"],
        "ok": envelope["ok"],
        "elapsed_ms": round(elapsed_ms, 3),
    }
    if "result" in envelope:
        fields["result"] = envelope["result"]
    if "code" in envelope:
        fields["code"] = envelope["code"]
        fields["message"] = envelope["message"]
    log_event("bridge_result", **_call_fields(channel, request), **fields)


__all__ = [
    "new_request_id",
    "get_exec_log_path",
    "log_event",
    "log_call",
    "log_failure",
    "log_result",
]
