"""Synchronous call bridge and the method channel that fronts it."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, Union

from gonative.config import NOT_IMPLEMENTED_CODE, resolve_channel_name
from gonative.error_model import (
    HandlerFailure,
    MissingArgument,
    NotImplementedOperation,
    TypeCoercionFailure,
    error_detail_from,
)
from gonative.utils.logging_utils import log_call, log_failure, log_result, new_request_id

from .arguments import ArgumentBag
from .registry import HandlerSpec, build_handler_registry


@dataclass(frozen=True)
class OperationRequest:
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    request_id: str = field(default_factory=new_request_id, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.arguments, Mapping):
            object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))


@dataclass(frozen=True)
class Success:
    value: Any = None

    ok = True
    kind = "success"

    def to_envelope(self) -> dict[str, Any]:
        return {"ok": True, "kind": self.kind, "result": self.value}


@dataclass(frozen=True)
class Failure:
    code: str
    message: str = ""
    details: Any = None

    ok = False

    @property
    def kind(self) -> str:
        return "notImplemented" if self.code == NOT_IMPLEMENTED_CODE else "error"

    def to_envelope(self) -> dict[str, Any]:
        if self.kind == "notImplemented":
            return {"ok": False, "kind": self.kind}
        return {
            "ok": False,
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


OperationResult = Union[Success, Failure]


def not_implemented() -> Failure:
    return Failure(NOT_IMPLEMENTED_CODE, "")


class CallBridge:
    """Looks up, validates and invokes registered operations.

    ``handle`` returns exactly one result per request and never raises.
    """

    def __init__(self, registry: Mapping[str, HandlerSpec], *, channel: str | None = None) -> None:
        self._registry = registry
        self.channel = channel or resolve_channel_name()

    @property
    def registry(self) -> Mapping[str, HandlerSpec]:
        return self._registry

    def handle(self, request: OperationRequest) -> OperationResult:
        started = time.perf_counter()
        log_call(self.channel, request)
        result = self._dispatch(request)
        log_result(self.channel, request, result, elapsed_ms=(time.perf_counter() - started) * 1000)
        return result

    def _lookup(self, name: str) -> HandlerSpec:
        spec = self._registry.get(name)
        if spec is None:
            raise NotImplementedOperation(name)
        return spec

    def _dispatch(self, request: OperationRequest) -> OperationResult:
        try:
            spec = self._lookup(request.name)
        except NotImplementedOperation as exc:
            log_failure(self.channel, request, event="bridge_not_implemented", error=error_detail_from(exc))
            return not_implemented()

        schema = spec.schema
        try:
            value = ArgumentBag(request.arguments).require_typed(schema.key, schema.expected, schema.bounds)
        except MissingArgument as exc:
            log_failure(self.channel, request, event="bridge_rejected", error=error_detail_from(exc))
            return Failure(request.name, schema.missing_message or exc.message)
        except TypeCoercionFailure as exc:
            log_failure(self.channel, request, event="bridge_rejected", error=error_detail_from(exc))
            return Failure(request.name, exc.message)

        try:
            output = spec.handler(value)
        except Exception as exc:
            failure = HandlerFailure(request.name, exc)
            log_failure(
                self.channel,
                request,
                event="bridge_handler_failure",
                error=error_detail_from(failure),
                exception=type(exc).__name__,
            )
            return Failure(request.name, failure.message)
        return Success(output)


class ResultSink(Protocol):
    """Receives the single outcome of a method call."""

    def success(self, value: Any) -> None: ...

    def error(self, code: str, message: str, details: Any) -> None: ...

    def not_implemented(self) -> None: ...


class ResultAlreadyDelivered(RuntimeError):
    pass


class RecordingSink:
    """In-memory sink that keeps the delivered result and rejects a second one."""

    def __init__(self) -> None:
        self.result: OperationResult | None = None

    def _store(self, result: OperationResult) -> None:
        if self.result is not None:
            raise ResultAlreadyDelivered(f"result already delivered: {self.result!r}")
        self.result = result

    def success(self, value: Any) -> None:
        self._store(Success(value))

    def error(self, code: str, message: str, details: Any) -> None:
        self._store(Failure(code, message, details))

    def not_implemented(self) -> None:
        self._store(not_implemented())


def deliver_result(result: OperationResult, sink: ResultSink) -> None:
    if isinstance(result, Success):
        sink.success(result.value)
    elif result.kind == "notImplemented":
        sink.not_implemented()
    else:
        sink.error(result.code, result.message, result.details)


class MethodChannel:
    """Named channel routing host method calls through a ``CallBridge``."""

    def __init__(self, name: str, bridge: CallBridge) -> None:
        self.name = name
        self.bridge = bridge

    def invoke_method(
        self,
        method: str,
        arguments: Mapping[str, Any] | None,
        sink: ResultSink,
    ) -> OperationResult:
        request = OperationRequest(method, arguments if arguments is not None else {})
        result = self.bridge.handle(request)
        deliver_result(result, sink)
        return result


def create_channel(
    name: str | None = None,
    registry: Mapping[str, HandlerSpec] | None = None,
) -> MethodChannel:
    """Build the default channel over a freshly built handler registry.

    Without *name*, the channel name is read from the environment at call time.
    """
    channel_name = name or resolve_channel_name()
    return MethodChannel(
        channel_name,
        CallBridge(registry if registry is not None else build_handler_registry(), channel=channel_name),
    )


__all__ = [
    "OperationRequest",
    "Success",
    "Failure",
    "OperationResult",
    "not_implemented",
    "CallBridge",
    "ResultSink",
    "ResultAlreadyDelivered",
    "RecordingSink",
    "deliver_result",
    "MethodChannel",
    "create_channel",
]
