"""Failure taxonomy and error payload helpers for the call bridge."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


class BridgeError(Exception):
    """Base class for failures raised inside the bridge boundary."""

    code = "bridge_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class MissingArgument(BridgeError):
    code = "missing_argument"

    def __init__(self, key: str, message: str = "") -> None:
        super().__init__(message or f"missing required argument '{key}'")
        self.key = key


class TypeCoercionFailure(BridgeError):
    code = "type_coercion"

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class HandlerFailure(BridgeError):
    code = "handler_failure"

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(describe_exception(cause))
        self.operation = operation
        self.cause = cause


class NotImplementedOperation(BridgeError):
    code = "not_implemented"

    def __init__(self, operation: str) -> None:
        super().__init__(f"no handler registered for '{operation}'")
        self.operation = operation


@dataclass(frozen=True)
class ErrorDetail:
    code: str
    message: str
    retryable: bool = False


def describe_exception(exc: BaseException) -> str:
    """Human-readable cause for *exc*, falling back to the class name."""
    text = str(exc).strip()
    return text or type(exc).__name__


def format_error(message: str, *, code: str = "error") -> str:
    text = str(message or "").strip()
    if not text:
        text = code or "error"
    if text.upper().startswith("ERR:"):
        return text
    return f"ERR: {text}"


def error_detail_from(exc: BridgeError) -> dict[str, Any]:
    return asdict(ErrorDetail(code=exc.code, message=exc.message))


__all__ = [
    "BridgeError",
    "MissingArgument",
    "TypeCoercionFailure",
    "HandlerFailure",
    "NotImplementedOperation",
    "ErrorDetail",
    "describe_exception",
    "format_error",
    "error_detail_from",
]
