"""gonative-bridge CLI: a host dispatcher that drives the method channel."""

from __future__ import annotations

import argparse
import sys
from typing import Any, TextIO

from gonative.channel import (
    MethodChannel,
    OperationResult,
    RecordingSink,
    create_channel,
    registered_operations,
)
from gonative.config import DATA_ARGUMENT_KEY, DEBUG, refresh_runtime_config
from gonative.error_model import format_error
from gonative.utils.json_utils import (
    InvalidCallError,
    decode_method_call,
    encode_envelope,
    error_envelope,
    parse_arguments,
)
from gonative.utils.logging_utils import get_exec_log_path, log_event

INVALID_CALL_CODE = "invalidCall"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="gonative method-channel bridge")
    parser.add_argument("--channel", default=None, help="Override the channel name.")
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=DEBUG,
        help="Print channel and log details to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    call = sub.add_parser("call", help="Invoke one operation and print its result envelope.")
    call.add_argument("method", help="Operation name, e.g. dataProcessor_increment.")
    call.add_argument("--args", dest="arguments", default="", help="Arguments as a JSON object.")
    call.add_argument("--data", type=int, default=None, help='Shortcut for --args \'{"data": N}\'.')

    sub.add_parser("serve", help="Read JSON-line method calls from stdin, answer on stdout.")
    sub.add_parser("operations", help="List registered operations.")
    return parser


def _report_failure(code: str, message: str, *, debug: bool) -> None:
    if debug:
        print(f"[debug] {code}: {format_error(message, code=code)}", file=sys.stderr)


def _emit(result: OperationResult, out: TextIO, *, debug: bool) -> None:
    print(encode_envelope(result.to_envelope()), file=out, flush=True)
    if not result.ok:
        _report_failure(result.code, result.message, debug=debug)


def run_call(
    channel: MethodChannel,
    method: str,
    arguments: dict[str, Any],
    out: TextIO,
    *,
    debug: bool = False,
) -> int:
    result = channel.invoke_method(method, arguments, RecordingSink())
    _emit(result, out, debug=debug)
    return 0 if result.ok else 1


def serve(channel: MethodChannel, stream: TextIO, out: TextIO, *, debug: bool = False) -> int:
    """Answer every non-blank line of *stream* with exactly one envelope line."""
    handled = 0
    for line in stream:
        text = line.strip()
        if not text:
            continue
        handled += 1
        try:
            method, arguments = decode_method_call(text)
        except InvalidCallError as exc:
            log_event("bridge_invalid_call", line=text, error=str(exc))
            print(encode_envelope(error_envelope(INVALID_CALL_CODE, str(exc))), file=out, flush=True)
            _report_failure(INVALID_CALL_CODE, str(exc), debug=debug)
            continue
        _emit(channel.invoke_method(method, arguments, RecordingSink()), out, debug=debug)
    log_event("bridge_serve_done", handled=handled)
    return 0


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    # Pick up .env edits made since import; exported variables still win.
    refresh_runtime_config(override=False)
    channel = create_channel(args.channel)
    if args.debug:
        print(f"[debug] channel={channel.name} log={get_exec_log_path()}", file=sys.stderr)

    if args.command == "operations":
        for name in registered_operations(channel.bridge.registry):
            print(name, file=stdout)
        return 0

    if args.command == "serve":
        return serve(channel, stdin, stdout, debug=args.debug)

    try:
        arguments = parse_arguments(args.arguments)
    except InvalidCallError as exc:
        print(encode_envelope(error_envelope(INVALID_CALL_CODE, str(exc))), file=stdout)
        _report_failure(INVALID_CALL_CODE, str(exc), debug=args.debug)
        return 2
    if args.data is not None:
        arguments[DATA_ARGUMENT_KEY] = args.data
    return run_call(channel, args.method, arguments, stdout, debug=args.debug)


if __name__ == "__main__":
    raise SystemExit(main())
