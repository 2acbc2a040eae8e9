# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Conversion from tool ranges (1-based) to renderable host ranges (0-based)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from .models import Position, Range, RenderPosition, RenderRange
from .serialization import coerce_int, mapping_from_json

DEFAULT_COORDINATE: Final[int] = 1


def build_position(
    line: object,
    column: object,
    *,
    default_line: int = DEFAULT_COORDINATE,
    default_column: int = DEFAULT_COORDINATE,
) -> Position:
    """Return a :class:`Position` from loosely typed ``line``/``column`` values.

    Args:
        line: Line value reported by the tool.
        column: Column value reported by the tool.
        default_line: Line used when ``line`` is not a usable integer.
        default_column: Column used when ``column`` is not a usable integer.

    Returns:
        Position: 1-based position with integer coordinates.
    """

    return Position(
        line=coerce_int(line, default_line),
        column=coerce_int(column, default_column),
    )


def build_range(payload: Mapping[str, object]) -> Range | None:
    """Return a :class:`Range` from a ``{"start": ..., "end": ...}`` payload.

    A missing ``end`` keeps the range open; a present ``end`` inherits the
    start coordinates for any field it cannot supply.
    """

    start_payload = payload.get("start")
    if not isinstance(start_payload, Mapping):
        return None
    start = build_position(start_payload.get("line"), start_payload.get("column"))
    end_payload = payload.get("end")
    end: Position | None = None
    if isinstance(end_payload, Mapping):
        end = build_position(
            end_payload.get("line"),
            end_payload.get("column"),
            default_line=start.line,
            default_column=start.column,
        )
    return Range(start=start, end=end)


def build_point_range(line: object, column: object) -> Range:
    """Return a start-only :class:`Range` from scalar ``line``/``column`` fields."""

    return Range(start=build_position(line, column))


def range_from_record(record: Mapping[str, object]) -> Range | None:
    """Return the range described by a structured diagnostic record.

    ``range.start`` wins over top-level ``line``/``column`` scalars; a record
    with neither has no range.
    """

    nested = mapping_from_json(record.get("range"))
    if isinstance(nested.get("start"), Mapping):
        return build_range(nested)
    line = record.get("line")
    column = record.get("column")
    if line is not None or column is not None:
        return build_point_range(line, column)
    return None


def _zero_based(value: int) -> int:
    return max(0, value - 1)


def to_render_range(source: Range | None) -> RenderRange:
    """Convert an optional 1-based range into a renderable 0-based range.

    Args:
        source: Range reported by the tool, or ``None`` when absent.

    Returns:
        RenderRange: Ordered range at least one character wide. A missing
        range maps to the first character of the file; a range without a
        usable end maps to the single character at its start.
    """

    if source is None:
        return RenderRange(
            start=RenderPosition(line=0, character=0),
            end=RenderPosition(line=0, character=1),
        )
    start = RenderPosition(line=_zero_based(source.start.line), character=_zero_based(source.start.column))
    end_source = source.end
    if end_source is not None and end_source.line and end_source.column:
        end = RenderPosition(line=_zero_based(end_source.line), character=_zero_based(end_source.column))
        if (end.line, end.character) < (start.line, start.character):
            start, end = end, start
        if end != start:
            return RenderRange(start=start, end=end)
    return RenderRange(start=start, end=RenderPosition(line=start.line, character=start.character + 1))


__all__ = [
    "DEFAULT_COORDINATE",
    "build_point_range",
    "build_position",
    "build_range",
    "range_from_record",
    "to_render_range",
]
