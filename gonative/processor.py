"""Data processor service backing the ``dataProcessor_increment`` operation."""

from __future__ import annotations

from gonative.config import INT64_MAX


class NegativeDataError(ValueError):
    pass


class HandlerOverflowError(OverflowError):
    pass


class DataProcessor:
    """Stateless integer processor; safe to share across threads."""

    def increment(self, data: int) -> int:
        """Return ``data + 1``.

        Negative input is rejected, as is the largest 64-bit value since its
        successor does not fit the native integer width.
        """
        if data < 0:
            raise NegativeDataError("data can't be negative")
        if data >= INT64_MAX:
            raise HandlerOverflowError(f"data {data} overflows int64 on increment")
        return data + 1


__all__ = ["DataProcessor", "NegativeDataError", "HandlerOverflowError"]
