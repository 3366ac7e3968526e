"""Typed accessors over the loosely-typed argument bag of a method call."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gonative.config import INT32_MAX, INT32_MIN
from gonative.error_model import MissingArgument, TypeCoercionFailure


def _type_label(expected: tuple[type, ...]) -> str:
    return "/".join(t.__name__ for t in expected)


class ArgumentBag:
    """Read-only view over call arguments.

    A payload that is not a mapping behaves as an empty bag, so every key
    lookup reports the argument as missing.
    """

    def __init__(self, arguments: Any) -> None:
        self._arguments: Mapping[str, Any] = arguments if isinstance(arguments, Mapping) else {}

    def has(self, key: str) -> bool:
        return key in self._arguments

    def require(self, key: str) -> Any:
        if key not in self._arguments:
            raise MissingArgument(key)
        return self._arguments[key]

    def require_typed(
        self,
        key: str,
        expected: tuple[type, ...],
        bounds: tuple[int, int] | None = None,
    ) -> Any:
        """Return the value under *key* if it is one of *expected*.

        ``bounds`` is an inclusive ``(low, high)`` range applied to integer
        values; a value outside it cannot be coerced.
        """
        value = self.require(key)
        # bool is an int subclass; only accept it when asked for explicitly.
        if isinstance(value, bool) and bool not in expected:
            raise TypeCoercionFailure(
                key, f"argument '{key}' must be {_type_label(expected)}, got bool"
            )
        if not isinstance(value, expected):
            raise TypeCoercionFailure(
                key,
                f"argument '{key}' must be {_type_label(expected)}, got {type(value).__name__}",
            )
        if bounds is not None and isinstance(value, int) and not isinstance(value, bool):
            low, high = bounds
            if value < low or value > high:
                raise TypeCoercionFailure(
                    key, f"argument '{key}' is out of range [{low}, {high}]: {value}"
                )
        return value

    def require_int(self, key: str) -> int:
        """Host ``int`` argument: a 32-bit signed integer."""
        return self.require_typed(key, (int,), (INT32_MIN, INT32_MAX))


__all__ = ["ArgumentBag"]
