"""Slim entry point for the gonative bridge.

Re-exports the public surface of the ``gonative`` package so callers can do
``from app import X``; ``main()`` hands off to the CLI.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Re-exports from config
# ---------------------------------------------------------------------------
from gonative.config import (  # noqa: F401
    PROJECT_ROOT,
    DEBUG,
    CHANNEL_NAME,
    DEFAULT_CHANNEL_NAME,
    resolve_channel_name,
    refresh_runtime_config,
    OP_DATA_PROCESSOR_INCREMENT,
    DATA_ARGUMENT_KEY,
    MISSING_DATA_MESSAGE,
    NOT_IMPLEMENTED_CODE,
    EXEC_LOG_ENABLED,
    EXEC_LOG_DIR,
    EXEC_LOG_MAX_CHARS,
)

# ---------------------------------------------------------------------------
# Re-exports from logging_utils
# ---------------------------------------------------------------------------
from gonative.utils.logging_utils import (  # noqa: F401
    log_event,
    get_exec_log_path,
)

# ---------------------------------------------------------------------------
# Re-exports from the channel package
# ---------------------------------------------------------------------------
from gonative.channel import (  # noqa: F401
    ArgumentBag,
    ArgumentSchema,
    HandlerSpec,
    build_handler_registry,
    registered_operations,
    OperationRequest,
    Success,
    Failure,
    not_implemented,
    CallBridge,
    RecordingSink,
    MethodChannel,
    create_channel,
)

# ---------------------------------------------------------------------------
# Re-exports from processor / error_model
# ---------------------------------------------------------------------------
from gonative.processor import DataProcessor  # noqa: F401
from gonative.error_model import (  # noqa: F401
    BridgeError,
    MissingArgument,
    TypeCoercionFailure,
    HandlerFailure,
    NotImplementedOperation,
)


def main(argv: list[str] | None = None) -> int:
    from cli.main import main as cli_main

    return cli_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
