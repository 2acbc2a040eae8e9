# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for severity normalisation."""

from __future__ import annotations

import pytest

from checkdiag.core.severity import Severity, normalize_severity, severity_to_lsp


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("error", Severity.ERROR),
        ("ERROR", Severity.ERROR),
        ("Warning", Severity.WARNING),
        ("note", Severity.NOTE),
        ("Info", Severity.INFO),
    ],
)
def test_known_tokens_match_case_insensitively(token: str, expected: Severity) -> None:
    assert normalize_severity(token) is expected


@pytest.mark.parametrize("token", [None, "", "fatal", "hint", "warn", " error", 3, ["error"]])
def test_unknown_tokens_degrade_to_info(token: object) -> None:
    assert normalize_severity(token) is Severity.INFO


def test_severity_instances_pass_through() -> None:
    assert normalize_severity(Severity.WARNING) is Severity.WARNING


def test_lsp_levels_render_notes_as_hints() -> None:
    assert [severity_to_lsp(sev) for sev in (Severity.ERROR, Severity.WARNING, Severity.INFO, Severity.NOTE)] == [
        1,
        2,
        3,
        4,
    ]
