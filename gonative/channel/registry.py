"""Handler registry for the method channel.

Built once at startup and exposed as a read-only mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable

from gonative.config import (
    DATA_ARGUMENT_KEY,
    INT32_MAX,
    INT32_MIN,
    MISSING_DATA_MESSAGE,
    OP_DATA_PROCESSOR_INCREMENT,
)
from gonative.processor import DataProcessor


@dataclass(frozen=True)
class ArgumentSchema:
    key: str
    expected: tuple[type, ...]
    missing_message: str = ""
    bounds: tuple[int, int] | None = None


@dataclass(frozen=True)
class HandlerSpec:
    name: str
    handler: Callable[[Any], Any]
    schema: ArgumentSchema


def build_handler_registry(processor: DataProcessor | None = None) -> Mapping[str, HandlerSpec]:
    processor = processor or DataProcessor()
    specs = [
        HandlerSpec(
            name=OP_DATA_PROCESSOR_INCREMENT,
            handler=processor.increment,
            schema=ArgumentSchema(
                key=DATA_ARGUMENT_KEY,
                expected=(int,),
                missing_message=MISSING_DATA_MESSAGE,
                bounds=(INT32_MIN, INT32_MAX),
            ),
        ),
    ]
    return MappingProxyType({spec.name: spec for spec in specs})


def registered_operations(registry: Mapping[str, HandlerSpec]) -> list[str]:
    return sorted(registry)


__all__ = [
    "ArgumentSchema",
    "HandlerSpec",
    "build_handler_registry",
    "registered_operations",
]
