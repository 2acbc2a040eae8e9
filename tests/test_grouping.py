# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for per-file grouping and sink publication."""

from __future__ import annotations

from checkdiag.core.models import Diagnostic, Position, Range, RenderPosition
from checkdiag.core.severity import Severity
from checkdiag.reporting import (
    DiagnosticCollection,
    SinkCall,
    group_diagnostics,
    publish_diagnostics,
    to_host_diagnostic,
)


def _diag(file: str, message: str, severity: Severity = Severity.ERROR) -> Diagnostic:
    return Diagnostic(file=file, message=message, severity=severity, range=Range(start=Position(line=2, column=4)))


def test_to_host_diagnostic_converts_range_and_code() -> None:
    diagnostic = Diagnostic(file="/p/a.x", message="m", code=101, range=None)

    host = to_host_diagnostic(diagnostic, source="vitc")

    assert host.code == "101"
    assert host.source == "vitc"
    assert host.range.start == RenderPosition(line=0, character=0)
    assert host.range.end == RenderPosition(line=0, character=1)


def test_group_preserves_first_appearance_order() -> None:
    diagnostics = [
        _diag("/p/b.x", "first"),
        _diag("/p/a.x", "second"),
        _diag("/p/b.x", "third", Severity.NOTE),
    ]

    grouped = group_diagnostics(diagnostics)

    assert list(grouped) == ["/p/b.x", "/p/a.x"]
    assert [entry.message for entry in grouped["/p/b.x"]] == ["first", "third"]
    assert grouped["/p/b.x"][0].range.start == RenderPosition(line=1, character=3)


def test_group_merges_equivalent_paths() -> None:
    grouped = group_diagnostics([_diag("/p/./a.x", "one"), _diag("/p/src/../a.x", "two")])

    assert list(grouped) == ["/p/a.x"]
    assert len(grouped["/p/a.x"]) == 2


def test_group_skips_diagnostics_without_file() -> None:
    assert group_diagnostics([_diag("", "orphan")]) == {}


def test_publish_clears_before_setting() -> None:
    sink = DiagnosticCollection()
    sink.set("/p/stale.x", [to_host_diagnostic(_diag("/p/stale.x", "old"))])

    grouped = group_diagnostics([_diag("/p/a.x", "new"), _diag("/p/b.x", "other")])
    publish_diagnostics(sink, grouped, "/p/a.x")

    assert sink.calls[1:] == [
        SinkCall("clear"),
        SinkCall("set", "/p/a.x", 1),
        SinkCall("set", "/p/b.x", 1),
    ]
    assert "/p/stale.x" not in sink
    assert len(sink) == 2


def test_publish_empty_result_resets_triggering_file() -> None:
    sink = DiagnosticCollection()
    sink.set("/p/a.x", [to_host_diagnostic(_diag("/p/a.x", "old"))])

    publish_diagnostics(sink, {}, "/p/a.x")

    assert sink.calls[1:] == [SinkCall("clear"), SinkCall("set", "/p/a.x", 0)]
    assert sink.get("/p/a.x") == ()
    assert len(sink) == 0


def test_collection_counts_by_severity() -> None:
    sink = DiagnosticCollection()
    grouped = group_diagnostics(
        [_diag("/p/a.x", "e"), _diag("/p/a.x", "w", Severity.WARNING), _diag("/p/b.x", "e2")],
    )

    publish_diagnostics(sink, grouped, "/p/a.x")

    assert sink.count() == 3
    assert sink.count(Severity.ERROR) == 2
    assert dict(sink.items()).keys() == {"/p/a.x", "/p/b.x"}
