"""Shared utility helpers used across bridge modules."""

from gonative.utils.json_utils import (
    InvalidCallError,
    decode_method_call,
    encode_envelope,
    error_envelope,
    parse_arguments,
)
from gonative.utils.logging_utils import (
    get_exec_log_path,
    log_call,
    log_event,
    log_failure,
    log_result,
    new_request_id,
)

__all__ = [
    "InvalidCallError",
    "decode_method_call",
    "encode_envelope",
    "error_envelope",
    "parse_arguments",
    "get_exec_log_path",
    "log_call",
    "log_event",
    "log_failure",
    "log_result",
    "new_request_id",
]
