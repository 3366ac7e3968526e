"""Contract tests for env config helpers and the JSONL execution log."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gonative import config
from gonative.channel import CallBridge, OperationRequest, RecordingSink, build_handler_registry, create_channel
from gonative.utils import logging_utils

OP = "dataProcessor_increment"


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GONATIVE_TEST_FLAG", "off")
    monkeypatch.setenv("GONATIVE_TEST_INT", " 12 ")
    monkeypatch.setenv("GONATIVE_TEST_BAD_INT", "twelve")
    assert config._env_flag("GONATIVE_TEST_FLAG", True) is False
    assert config._env_flag("GONATIVE_TEST_UNSET", True) is True
    assert config._env_int("GONATIVE_TEST_INT") == 12
    assert config._env_int("GONATIVE_TEST_BAD_INT", 3) == 3


def test_refresh_picks_up_channel_name_from_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("GONATIVE_CHANNEL_NAME=dotenv.example/bridge\n", encoding="utf-8")
    monkeypatch.setattr(config, "ENV_FILE", env_file)
    # setenv first so teardown removes whatever the refresh writes.
    monkeypatch.setenv("GONATIVE_CHANNEL_NAME", "placeholder")
    monkeypatch.delenv("GONATIVE_CHANNEL_NAME")

    assert config.resolve_channel_name() == config.DEFAULT_CHANNEL_NAME
    before = config.get_runtime_config_version()
    assert config.refresh_runtime_config(override=False) == before + 1
    assert config.resolve_channel_name() == "dotenv.example/bridge"
    assert create_channel().name == "dotenv.example/bridge"


@pytest.fixture
def exec_log(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setattr(logging_utils, "EXEC_LOG_ENABLED", True)
    monkeypatch.setattr(logging_utils, "EXEC_LOG_DIR", tmp_path)
    monkeypatch.setattr(logging_utils, "EXEC_LOG_MAX_CHARS", 0)
    monkeypatch.setattr(logging_utils, "_EXEC_LOG_FILE", None)
    monkeypatch.setattr(logging_utils, "_EXEC_LOG_FAILED", False)
    return tmp_path


def _records(log_dir: Path) -> list[dict]:
    files = list(log_dir.glob("bridge-*.jsonl"))
    assert len(files) == 1
    return [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]


def test_handler_failure_records_share_channel_and_request_id(exec_log: Path) -> None:
    create_channel("test/channel").invoke_method(OP, {"data": -1}, RecordingSink())

    records = _records(exec_log)
    assert [r["event"] for r in records] == ["bridge_call", "bridge_handler_failure", "bridge_result"]
    assert {r["channel"] for r in records} == {"test/channel"}
    assert {r["operation"] for r in records} == {OP}
    assert len({r["request_id"] for r in records}) == 1

    failure, result = records[1], records[2]
    assert failure["exception"] == "NegativeDataError"
    assert failure["error"]["code"] == "handler_failure"
    assert result["kind"] == "error"
    assert result["ok"] is False
    assert result["code"] == OP
    assert result["message"] == "data can't be negative"
    assert result["elapsed_ms"] >= 0


def test_success_record_carries_result(exec_log: Path) -> None:
    create_channel("test/channel").invoke_method(OP, {"data": 1}, RecordingSink())

    result = _records(exec_log)[-1]
    assert result["event"] == "bridge_result"
    assert result["kind"] == "success"
    assert result["result"] == 2
    assert "code" not in result


def test_unknown_operation_logs_not_implemented(exec_log: Path) -> None:
    create_channel("test/channel").invoke_method("unknownOp", {}, RecordingSink())

    records = _records(exec_log)
    assert [r["event"] for r in records] == ["bridge_call", "bridge_not_implemented", "bridge_result"]
    assert records[1]["error"]["code"] == "not_implemented"
    assert records[2]["kind"] == "notImplemented"


def test_rejected_arguments_are_logged(exec_log: Path) -> None:
    CallBridge(build_handler_registry(), channel="test/channel").handle(OperationRequest(OP, {"data": 2**31}))

    rejected = _records(exec_log)[1]
    assert rejected["event"] == "bridge_rejected"
    assert rejected["error"]["code"] == "type_coercion"


def test_log_values_are_truncated(exec_log: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "EXEC_LOG_MAX_CHARS", 30)
    create_channel().bridge.handle(OperationRequest("unknownOp", {"data": "x" * 200}))

    call = _records(exec_log)[0]
    assert call["arguments"]["data"].endswith("...[truncated:200]")
    assert len(call["arguments"]["data"]) <= 30


def test_deeply_nested_arguments_do_not_break_logging(exec_log: Path) -> None:
    nested: object = 1
    for _ in range(200):
        nested = [nested]

    result = create_channel().bridge.handle(OperationRequest(OP, {"data": nested}))
    assert result.ok is False

    call = _records(exec_log)[0]
    assert "...[nested]" in json.dumps(call["arguments"])


def test_log_disabled_writes_nothing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(logging_utils, "EXEC_LOG_ENABLED", False)
    monkeypatch.setattr(logging_utils, "EXEC_LOG_DIR", tmp_path)
    logging_utils.log_event("bridge_call", operation="x")
    assert list(tmp_path.iterdir()) == []
