# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for rendering published diagnostics on the console or as JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from rich.console import Console
from rich.text import Text

from ..core.models import HostDiagnostic
from ..core.serialization import JsonValue
from ..core.severity import Severity, severity_to_lsp
from ..filesystem.paths import display_relative_path

LOCATION_SEPARATOR: Final[str] = ":"

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.NOTE: "cyan",
    Severity.INFO: "blue",
}


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return _SEVERITY_STYLES.get(severity, "blue")


def format_location(file_path: str, diagnostic: HostDiagnostic, root: Path | None = None) -> str:
    """Return ``file:line:col`` using 1-based numbers for humans."""

    shown = display_relative_path(file_path, root) if root is not None else file_path
    start = diagnostic.range.start
    return LOCATION_SEPARATOR.join((shown, str(start.line + 1), str(start.character + 1)))


def format_diagnostic_line(
    file_path: str,
    diagnostic: HostDiagnostic,
    *,
    root: Path | None = None,
    color: bool = True,
) -> Text:
    """Return a formatted diagnostic line for pretty output."""

    line = Text(format_location(file_path, diagnostic, root))
    line.append(" ")
    line.append(diagnostic.severity.value, style=severity_color(diagnostic.severity) if color else None)
    if diagnostic.code:
        line.append(f" [{diagnostic.code}]", style="bold" if color else None)
    line.append(f" {diagnostic.message}")
    return line


def render_pretty(
    console: Console,
    entries: Iterable[tuple[str, Sequence[HostDiagnostic]]],
    *,
    root: Path | None = None,
    color: bool = True,
) -> int:
    """Print every diagnostic in ``entries`` and return how many were printed."""

    printed = 0
    for file_path, diagnostics in entries:
        for diagnostic in diagnostics:
            console.print(format_diagnostic_line(file_path, diagnostic, root=root, color=color))
            printed += 1
    return printed


def serialize_host_diagnostic(diagnostic: HostDiagnostic) -> dict[str, JsonValue]:
    """Return ``diagnostic`` in the Language Server Protocol shape."""

    payload: dict[str, JsonValue] = {
        "range": {
            "start": {"line": diagnostic.range.start.line, "character": diagnostic.range.start.character},
            "end": {"line": diagnostic.range.end.line, "character": diagnostic.range.end.character},
        },
        "severity": severity_to_lsp(diagnostic.severity),
        "message": diagnostic.message,
    }
    if diagnostic.code is not None:
        payload["code"] = diagnostic.code
    if diagnostic.source is not None:
        payload["source"] = diagnostic.source
    return payload


def render_json(entries: Iterable[tuple[str, Sequence[HostDiagnostic]]]) -> str:
    """Return a JSON document mapping file paths to LSP-shaped diagnostics."""

    document = {
        file_path: [serialize_host_diagnostic(diagnostic) for diagnostic in diagnostics]
        for file_path, diagnostics in entries
    }
    return json.dumps(document, indent=2)


__all__ = [
    "format_diagnostic_line",
    "format_location",
    "render_json",
    "render_pretty",
    "serialize_host_diagnostic",
    "severity_color",
]
