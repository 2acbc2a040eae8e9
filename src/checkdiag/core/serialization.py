# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing loosely typed tool payloads and serializing results."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, TypeAlias

from pydantic import BaseModel

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]

_LEADING_INTEGER: Final[re.Pattern[str]] = re.compile(r"\s*([+-]?\d+)")


def coerce_int(value: object, default: int) -> int:
    """Return ``value`` as an integer, falling back to ``default``.

    Strings contribute their leading integer (``"12abc"`` -> ``12``), finite
    floats are truncated, and everything else (booleans, ``None``, NaN,
    containers) yields ``default``.

    Args:
        value: Loosely typed value taken from tool output.
        default: Value returned when ``value`` carries no usable integer.

    Returns:
        int: Coerced integer value.
    """

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        return int(match.group(1)) if match else default
    return default


def coerce_optional_str(value: object) -> str | None:
    """Return a string representation of ``value`` or ``None`` when unset."""

    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def mapping_from_json(value: object) -> Mapping[str, JsonValue]:
    """Return ``value`` when it is a mapping, otherwise an empty mapping."""

    return value if isinstance(value, Mapping) else {}


def jsonify(value: object) -> JsonValue:
    """Convert ``value`` into a JSON-compatible structure.

    Args:
        value: Model, path, mapping or sequence produced by the pipeline.

    Returns:
        JsonValue: Representation that can be serialized by JSON encoders.
    """

    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, BaseModel):
        return jsonify(value.model_dump(mode="json"))
    if isinstance(value, Mapping):
        return {str(key): jsonify(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [jsonify(item) for item in value]
    return str(value)


__all__ = [
    "JsonScalar",
    "JsonValue",
    "coerce_int",
    "coerce_optional_str",
    "jsonify",
    "mapping_from_json",
]
