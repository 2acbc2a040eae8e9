# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the tolerant line-oriented text parser."""

from __future__ import annotations

from pathlib import Path

from checkdiag.core.models import Position, Range
from checkdiag.core.ranges import to_render_range
from checkdiag.core.severity import Severity
from checkdiag.parsers import build_line_rules, parse_text_diagnostics


def test_location_with_column(tmp_path: Path) -> None:
    diags = parse_text_diagnostics("src/main.x:10:4: error: unexpected token", tmp_path)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.file.endswith("src/main.x")
    assert diag.severity is Severity.ERROR
    assert diag.message == "unexpected token"
    rendered = to_render_range(diag.range)
    assert (rendered.start.line, rendered.start.character) == (9, 3)


def test_location_without_column(tmp_path: Path) -> None:
    diags = parse_text_diagnostics("src/main.x:10: warning: unused variable", tmp_path)

    assert len(diags) == 1
    assert diags[0].severity is Severity.WARNING
    assert diags[0].message == "unused variable"
    rendered = to_render_range(diags[0].range)
    assert (rendered.start.line, rendered.start.character) == (9, 0)


def test_severity_is_case_insensitive_and_colon_optional(tmp_path: Path) -> None:
    diags = parse_text_diagnostics("lib/util.x:3:7: NOTE declared here", tmp_path)

    assert diags[0].severity is Severity.NOTE
    assert diags[0].message == "declared here"


def test_stack_frame_lines_become_notes(tmp_path: Path) -> None:
    diags = parse_text_diagnostics("  called from at lib/util.x:12:5 during expansion", tmp_path)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.severity is Severity.NOTE
    assert diag.file == str(tmp_path / "lib" / "util.x")
    assert diag.message == "called from  during expansion"
    assert diag.range == Range(start=Position(line=12, column=5))


def test_noise_lines_are_ignored(tmp_path: Path) -> None:
    output = "\r\n".join(
        [
            "Compiling project...",
            "src/main.x:2:1: error: missing semicolon",
            "   2 | let x = 1",
            "     |          ^",
            "",
            "src/main.x:8: info: consider renaming",
            "1 error generated.",
        ]
    )

    diags = parse_text_diagnostics(output, tmp_path)

    assert [(diag.severity, diag.message) for diag in diags] == [
        (Severity.ERROR, "missing semicolon"),
        (Severity.INFO, "consider renaming"),
    ]


def test_rules_are_tried_in_priority_order(tmp_path: Path) -> None:
    rules = build_line_rules(tmp_path)

    assert [rule.name for rule in rules] == ["location-with-column", "location-without-column", "stack-frame"]
    line = "src/a.x:1:2: error: failed at src/b.x:3:4"
    assert rules[0].apply(line) is not None
    diags = parse_text_diagnostics(line, tmp_path)
    assert len(diags) == 1
    assert diags[0].file == str(tmp_path / "src" / "a.x")


def test_absolute_paths_are_kept(tmp_path: Path) -> None:
    diags = parse_text_diagnostics("/abs/path/file.x:1:1: warning: hmm", tmp_path)

    assert diags[0].file == "/abs/path/file.x"
