"""Method channel: handler registry, typed arguments and the call bridge."""

from .arguments import ArgumentBag
from .dispatcher import (
    CallBridge,
    Failure,
    MethodChannel,
    OperationRequest,
    OperationResult,
    RecordingSink,
    ResultAlreadyDelivered,
    ResultSink,
    Success,
    create_channel,
    deliver_result,
    not_implemented,
)
from .registry import ArgumentSchema, HandlerSpec, build_handler_registry, registered_operations

__all__ = [
    "ArgumentBag",
    "ArgumentSchema",
    "HandlerSpec",
    "build_handler_registry",
    "registered_operations",
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
