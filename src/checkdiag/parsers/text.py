# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tolerant line-oriented parser for compiler-style text output.

Each line is tried against an ordered list of :class:`LineRule` entries and
the first match wins. Lines matching no rule (code frames, carets, blank
lines, banners) are ignored; no attempt is made to join multi-line reports.
"""

from __future__ import annotations

import re
from functools import partial
from os import PathLike
from typing import Final

from ..core.models import Diagnostic, Range
from ..core.ranges import build_position
from ..core.severity import Severity, normalize_severity
from ..filesystem.paths import resolve_reported_path
from .base import LineRule, match_first, split_lines

_SEVERITY_TOKENS: Final[str] = "|".join(member.value for member in Severity)

LOCATION_WITH_COLUMN: Final[re.Pattern[str]] = re.compile(
    rf"^(.+?):(\d+):(\d+):\s*({_SEVERITY_TOKENS})\s*:?\s*(.+)$",
    re.IGNORECASE,
)
LOCATION_WITHOUT_COLUMN: Final[re.Pattern[str]] = re.compile(
    rf"^(.+?):(\d+):\s*({_SEVERITY_TOKENS})\s*:?\s*(.+)$",
    re.IGNORECASE,
)
STACK_FRAME: Final[re.Pattern[str]] = re.compile(r"at\s+(.+?):(\d+):(\d+)", re.IGNORECASE)


def _with_column(cwd: str | PathLike[str], match: re.Match[str], line: str) -> Diagnostic:
    del line
    path, row, column, severity, message = match.groups()
    return Diagnostic(
        file=resolve_reported_path(path, cwd),
        message=message.strip(),
        severity=normalize_severity(severity),
        range=Range(start=build_position(row, column)),
    )


def _without_column(cwd: str | PathLike[str], match: re.Match[str], line: str) -> Diagnostic:
    del line
    path, row, severity, message = match.groups()
    return Diagnostic(
        file=resolve_reported_path(path, cwd),
        message=message.strip(),
        severity=normalize_severity(severity),
        range=Range(start=build_position(row, 1)),
    )


def _stack_frame(cwd: str | PathLike[str], match: re.Match[str], line: str) -> Diagnostic:
    path, row, column = match.groups()
    return Diagnostic(
        file=resolve_reported_path(path, cwd),
        message=STACK_FRAME.sub("", line, count=1).strip(),
        severity=Severity.NOTE,
        range=Range(start=build_position(row, column)),
    )


def build_line_rules(cwd: str | PathLike[str]) -> tuple[LineRule, ...]:
    """Return the ordered line grammar bound to ``cwd``.

    Args:
        cwd: Directory relative file references resolve against.

    Returns:
        tuple[LineRule, ...]: Rules in priority order.
    """

    return (
        LineRule("location-with-column", LOCATION_WITH_COLUMN, partial(_with_column, cwd)),
        LineRule("location-without-column", LOCATION_WITHOUT_COLUMN, partial(_without_column, cwd)),
        LineRule("stack-frame", STACK_FRAME, partial(_stack_frame, cwd), anywhere=True),
    )


def parse_text_diagnostics(text: str, cwd: str | PathLike[str]) -> list[Diagnostic]:
    """Extract diagnostics from free-form stdout/stderr text.

    Args:
        text: Concatenated stdout and stderr of the checker.
        cwd: Directory relative file references resolve against.

    Returns:
        list[Diagnostic]: One diagnostic per recognised line, in input order.
    """

    rules = build_line_rules(cwd)
    results: list[Diagnostic] = []
    for line in split_lines(text):
        diagnostic = match_first(rules, line)
        if diagnostic is not None:
            results.append(diagnostic)
    return results


__all__ = [
    "LOCATION_WITHOUT_COLUMN",
    "LOCATION_WITH_COLUMN",
    "STACK_FRAME",
    "build_line_rules",
    "parse_text_diagnostics",
]
