# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Group normalized diagnostics per file and hand them to a sink."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..core.models import Diagnostic, HostDiagnostic
from ..core.ranges import to_render_range
from ..filesystem.paths import normalize_fs_case
from ..interfaces.diagnostics import DiagnosticSink

GroupedDiagnostics = dict[str, list[HostDiagnostic]]


def to_host_diagnostic(diagnostic: Diagnostic, *, source: str | None = None) -> HostDiagnostic:
    """Convert ``diagnostic`` into the 0-based model a sink renders.

    Args:
        diagnostic: Parsed diagnostic with 1-based coordinates.
        source: Label identifying the checker that reported it.

    Returns:
        HostDiagnostic: Diagnostic with a concrete, non-empty range and a
        stringified code.
    """

    return HostDiagnostic(
        range=to_render_range(diagnostic.range),
        message=diagnostic.message,
        severity=diagnostic.severity,
        code=None if diagnostic.code is None else str(diagnostic.code),
        source=source,
    )


def group_diagnostics(diagnostics: Iterable[Diagnostic], *, source: str | None = None) -> GroupedDiagnostics:
    """Bucket ``diagnostics`` by canonical file path.

    Files appear in order of first appearance and keep their diagnostics in
    input order. Diagnostics without a file are skipped.
    """

    grouped: GroupedDiagnostics = {}
    for diagnostic in diagnostics:
        if not diagnostic.file:
            continue
        key = normalize_fs_case(diagnostic.file)
        grouped.setdefault(key, []).append(to_host_diagnostic(diagnostic, source=source))
    return grouped


def publish_diagnostics(
    sink: DiagnosticSink,
    grouped: Mapping[str, Sequence[HostDiagnostic]],
    triggering_file: str,
) -> None:
    """Replace everything ``sink`` shows with ``grouped``.

    The sink is cleared first. When no file has diagnostics, the file that
    triggered the run is explicitly set to an empty list so stale entries
    for it disappear.

    Args:
        sink: Destination for the diagnostics.
        grouped: Diagnostics keyed by canonical file path.
        triggering_file: Canonical path of the file the check ran for.
    """

    sink.clear()
    if not grouped:
        sink.set(triggering_file, [])
        return
    for file_path, diagnostics in grouped.items():
        sink.set(file_path, list(diagnostics))


__all__ = [
    "GroupedDiagnostics",
    "group_diagnostics",
    "publish_diagnostics",
    "to_host_diagnostic",
]
