# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console and JSON rendering of published diagnostics."""

from __future__ import annotations

import io
import json
from pathlib import Path

from rich.console import Console

from checkdiag.core.models import HostDiagnostic, RenderPosition, RenderRange
from checkdiag.core.severity import Severity
from checkdiag.reporting.output import format_location, render_json, render_pretty, serialize_host_diagnostic


def _host(severity: Severity = Severity.ERROR, code: str | None = None) -> HostDiagnostic:
    return HostDiagnostic(
        range=RenderRange(
            start=RenderPosition(line=9, character=2),
            end=RenderPosition(line=9, character=6),
        ),
        message="unknown symbol",
        severity=severity,
        code=code,
        source="vitc",
    )


def test_format_location_is_one_based_and_relative() -> None:
    assert format_location("/repo/src/a.x", _host(), Path("/repo")) == "src/a.x:10:3"
    assert format_location("/elsewhere/a.x", _host(), Path("/repo")) == "/elsewhere/a.x:10:3"


def test_serialize_uses_numeric_severity() -> None:
    payload = serialize_host_diagnostic(_host(Severity.NOTE, code="E1"))

    assert payload["severity"] == 4
    assert payload["code"] == "E1"
    assert payload["source"] == "vitc"
    assert payload["range"] == {"start": {"line": 9, "character": 2}, "end": {"line": 9, "character": 6}}


def test_serialize_omits_missing_code() -> None:
    assert "code" not in serialize_host_diagnostic(_host())


def test_render_json_maps_files_to_entries() -> None:
    document = json.loads(render_json([("/repo/a.x", [_host()]), ("/repo/b.x", [])]))

    assert list(document) == ["/repo/a.x", "/repo/b.x"]
    assert document["/repo/b.x"] == []


def test_render_pretty_counts_printed_lines() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, no_color=True, soft_wrap=True)

    printed = render_pretty(
        console,
        [("/repo/a.x", [_host(), _host(Severity.WARNING, code="W3")])],
        root=Path("/repo"),
        color=False,
    )

    assert printed == 2
    lines = buffer.getvalue().splitlines()
    assert lines == ["a.x:10:3 error unknown symbol", "a.x:10:3 warning [W3] unknown symbol"]
