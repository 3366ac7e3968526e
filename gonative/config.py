"""Configuration and constants for the gonative bridge.

Every environment-variable lookup and compile-time constant lives here so the
rest of the codebase can simply ``from gonative.config import …``.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = (PROJECT_ROOT / ".env").resolve()
load_dotenv(dotenv_path=ENV_FILE)
_CONFIG_VERSION = 0


def refresh_runtime_config(*, override: bool = True) -> int:
    """Reload environment values from .env and bump runtime config version."""
    global _CONFIG_VERSION
    load_dotenv(dotenv_path=ENV_FILE, override=override)
    _CONFIG_VERSION += 1
    return _CONFIG_VERSION


def get_runtime_config_version() -> int:
    return _CONFIG_VERSION


# ---------------------------------------------------------------------------
# Helpers for parsing env vars
# ---------------------------------------------------------------------------
def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


def _env_int(name: str, default: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _resolve_env_path(name: str, default: str) -> Path:
    raw = os.getenv(name, default)
    text = str(raw or "").strip() or default
    path = Path(text).expanduser()
    if not path.is_absolute():
        path = (PROJECT_ROOT / path).resolve()
    return path


DEBUG = _env_flag("DEBUG", False)

# ---------------------------------------------------------------------------
# Channel surface
# ---------------------------------------------------------------------------
DEFAULT_CHANNEL_NAME = "example.com/gonative"


def resolve_channel_name() -> str:
    """Channel name from the environment as it stands now (after any refresh)."""
    return (os.getenv("GONATIVE_CHANNEL_NAME") or DEFAULT_CHANNEL_NAME).strip() or DEFAULT_CHANNEL_NAME


CHANNEL_NAME = resolve_channel_name()

OP_DATA_PROCESSOR_INCREMENT = "dataProcessor_increment"
DATA_ARGUMENT_KEY = "data"
MISSING_DATA_MESSAGE = 'Send argument as Map<"data", int>'
NOT_IMPLEMENTED_CODE = "notImplemented"

# Host ints arrive as 32-bit Integer; the native processor works in 64-bit.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1

# ---------------------------------------------------------------------------
# Execution logging
# ---------------------------------------------------------------------------
EXEC_LOG_ENABLED = _env_flag("EXEC_LOG_ENABLED", False)
EXEC_LOG_DIR = _resolve_env_path("EXEC_LOG_DIR", "logs")
EXEC_LOG_MAX_CHARS = max(0, _env_int("EXEC_LOG_MAX_CHARS", 0))
