# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final, cast

from ..core.models import Diagnostic
from ..core.serialization import JsonValue

JSON_OPENERS: Final[tuple[str, ...]] = ("{", "[")
LINE_SPLIT: Final[re.Pattern[str]] = re.compile(r"\r?\n")

LineExtractor = Callable[[re.Match[str], str], Diagnostic]


class StructuredOutputError(ValueError):
    """Raised when tool output that looked like JSON cannot be decoded."""


def is_likely_json(text: str) -> bool:
    """Return ``True`` when ``text`` starts with a JSON object or array."""

    trimmed = text.strip()
    return bool(trimmed) and trimmed.startswith(JSON_OPENERS)


def _reject_constant(name: str) -> JsonValue:
    raise StructuredOutputError(f"tool output is not valid JSON: unexpected {name}")


def load_json_payload(text: str) -> JsonValue:
    """Decode ``text`` as a single JSON document.

    Raises:
        StructuredOutputError: If ``text`` is not valid JSON, including the
            ``NaN`` and ``Infinity`` literals Python would otherwise accept.
    """

    try:
        return cast(JsonValue, json.loads(text, parse_constant=_reject_constant))
    except (json.JSONDecodeError, RecursionError) as exc:
        raise StructuredOutputError(f"tool output is not valid JSON: {exc}") from exc


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def split_lines(text: str) -> list[str]:
    """Split ``text`` on LF or CRLF line endings."""

    return LINE_SPLIT.split(text)


@dataclass(frozen=True, slots=True)
class LineRule:
    """One entry of an ordered line grammar.

    Attributes:
        name: Identifier used in debug output and tests.
        pattern: Compiled regular expression tried against each line.
        extract: Callable building a :class:`Diagnostic` from a match and the
            original line.
        anywhere: Search the whole line instead of anchoring at its start.
    """

    name: str
    pattern: re.Pattern[str]
    extract: LineExtractor
    anywhere: bool = False

    def apply(self, line: str) -> Diagnostic | None:
        """Return the diagnostic described by ``line`` or ``None`` on no match."""
        match = self.pattern.search(line) if self.anywhere else self.pattern.match(line)
        if match is None:
            return None
        return self.extract(match, line)


def match_first(rules: Iterable[LineRule], line: str) -> Diagnostic | None:
    """Return the diagnostic produced by the first rule matching ``line``."""

    for rule in rules:
        diagnostic = rule.apply(line)
        if diagnostic is not None:
            return diagnostic
    return None


__all__ = [
    "JSON_OPENERS",
    "LineExtractor",
    "LineRule",
    "StructuredOutputError",
    "is_likely_json",
    "iter_dicts",
    "load_json_payload",
    "match_first",
    "split_lines",
]
