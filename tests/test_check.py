# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for :func:`run_check_and_report`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from checkdiag.core.severity import Severity
from checkdiag.execution import OutputStrategy, resolve_working_directory, run_check_and_report
from checkdiag.execution.check import default_source_label
from checkdiag.interfaces.process import InvocationResult
from checkdiag.reporting import DiagnosticCollection, SinkCall


def test_working_directory_prefers_explicit_cwd(project: Path, tmp_path: Path) -> None:
    assert resolve_working_directory(project / "src" / "main.x", cwd=tmp_path) == tmp_path


def test_working_directory_uses_project_root(project: Path) -> None:
    assert resolve_working_directory(project / "src" / "main.x") == project


def test_working_directory_falls_back_to_parent(tmp_path: Path) -> None:
    target = tmp_path / "loose" / "file.x"
    target.parent.mkdir()
    target.write_text("", encoding="utf-8")

    assert resolve_working_directory(target, markers=("no-such-marker",)) == target.parent


def test_default_source_label_uses_binary_stem() -> None:
    assert default_source_label("/opt/vitte/bin/vitc.exe") == "vitc"
    assert default_source_label("vitc") == "vitc"


def test_structured_run_publishes_per_file(project: Path, fake_invoker) -> None:
    payload = {
        "diagnostics": [
            {"file": "src/main.x", "message": "unused", "severity": "warning", "line": 2, "column": 5},
            {"file": "src/lib.x", "message": "bad type", "severity": "error", "code": "E12"},
        ],
    }
    invoker = fake_invoker(InvocationResult(stdout=json.dumps(payload), exit_status=1))
    sink = DiagnosticCollection()
    trigger = project / "src" / "main.x"

    report = run_check_and_report(sink, "vitc", ["check"], trigger, invoker=invoker)

    main_key = str(project / "src" / "main.x")
    lib_key = str(project / "src" / "lib.x")
    assert report.cwd == project
    assert report.strategy is OutputStrategy.JSON
    assert report.invocation_count == 1
    assert report.total == 2
    assert report.triggering_file == main_key
    assert invoker.calls[0][2] == project
    assert sink.calls == [SinkCall("clear"), SinkCall("set", main_key, 1), SinkCall("set", lib_key, 1)]
    warning = sink.get(main_key)[0]
    assert warning.severity is Severity.WARNING
    assert (warning.range.start.line, warning.range.start.character) == (1, 4)
    assert warning.source == "vitc"
    assert sink.get(lib_key)[0].code == "E12"


def test_text_fallback_run(project: Path, fake_invoker) -> None:
    invoker = fake_invoker(
        InvocationResult(stdout="unknown flag --format\n", exit_status=2),
        InvocationResult(stderr="src/main.x:7: error: expected `;`\n", exit_status=1),
    )
    sink = DiagnosticCollection()

    report = run_check_and_report(sink, "vitc", ["check"], project / "src" / "main.x", invoker=invoker, source="vitte")

    key = str(project / "src" / "main.x")
    assert report.strategy is OutputStrategy.TEXT
    assert report.invocation_count == 2
    assert [call[1] for call in invoker.calls] == [("check", "--format=json"), ("check",)]
    (diagnostic,) = sink.get(key)
    assert diagnostic.message == "expected `;`"
    assert diagnostic.source == "vitte"
    assert (diagnostic.range.start.line, diagnostic.range.start.character) == (6, 0)


def test_clean_run_resets_triggering_file(project: Path, fake_invoker) -> None:
    invoker = fake_invoker(InvocationResult(stdout="[]", exit_status=0))
    sink = DiagnosticCollection()
    trigger = project / "src" / "main.x"

    report = run_check_and_report(sink, "vitc", ["check"], trigger, invoker=invoker)

    assert report.total == 0
    assert sink.calls == [SinkCall("clear"), SinkCall("set", str(trigger), 0)]


def test_unstartable_checker_publishes_nothing(project: Path, fake_invoker) -> None:
    invoker = fake_invoker(InvocationResult(startup_error=FileNotFoundError("vitc")))
    sink = DiagnosticCollection()

    report = run_check_and_report(sink, "vitc", ["check"], project / "src" / "main.x", invoker=invoker)

    assert report.invocation_count == 1
    assert report.total == 0
    assert isinstance(report.startup_error, FileNotFoundError)
    assert len(sink) == 0


def test_relative_triggering_file_keys_the_checked_file(
    tmp_path: Path,
    fake_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.x").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    invoker = fake_invoker(InvocationResult(stdout="[]", exit_status=0))
    sink = DiagnosticCollection()

    report = run_check_and_report(sink, "vitc", ["check"], "src/main.x", invoker=invoker, markers=("no-such-marker",))

    expected = str(tmp_path / "src" / "main.x")
    assert report.cwd == tmp_path / "src"
    assert report.triggering_file == expected
    assert sink.calls == [SinkCall("clear"), SinkCall("set", expected, 0)]


def test_relative_triggering_file_with_explicit_cwd(
    project: Path,
    tmp_path: Path,
    fake_invoker,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(project)
    other = tmp_path / "elsewhere"
    other.mkdir()
    invoker = fake_invoker(InvocationResult(stdout="[]", exit_status=0))
    sink = DiagnosticCollection()

    run_check_and_report(sink, "vitc", ["check"], "src/main.x", invoker=invoker, cwd=other)

    assert invoker.calls[0][2] == other
    assert sink.calls[-1] == SinkCall("set", str(project / "src" / "main.x"), 0)
