# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end check: run the checker, normalize, group and publish."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from ..core.runtime.process import SubprocessInvoker
from ..filesystem.paths import DEFAULT_PROJECT_MARKERS, find_project_root, resolve_reported_path
from ..interfaces.diagnostics import DiagnosticSink
from ..interfaces.process import ProcessInvoker
from ..reporting.grouping import GroupedDiagnostics, group_diagnostics, publish_diagnostics
from .negotiator import OutputStrategy, collect_diagnostics

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckReport:
    """Summary of one check run, returned after the sink was updated."""

    triggering_file: str
    cwd: Path
    strategy: OutputStrategy
    invocation_count: int
    grouped: GroupedDiagnostics
    startup_error: BaseException | None = None

    @property
    def total(self) -> int:
        """Return the number of diagnostics published."""
        return sum(len(entries) for entries in self.grouped.values())


def resolve_working_directory(
    triggering_file: str | PathLike[str],
    *,
    cwd: str | PathLike[str] | None = None,
    markers: Sequence[str] = DEFAULT_PROJECT_MARKERS,
) -> Path:
    """Return the directory the checker should run in.

    An explicit ``cwd`` wins; otherwise the nearest ancestor of
    ``triggering_file`` holding a project marker, else the file's directory.
    """

    if cwd is not None:
        return Path(cwd).absolute()
    target = Path(triggering_file).absolute()
    root = find_project_root(target, markers=markers)
    return root if root is not None else target.parent


def default_source_label(binary: str) -> str:
    """Return the label diagnostics carry when none is configured."""

    return Path(binary).stem or binary


def run_check_and_report(
    sink: DiagnosticSink,
    binary: str,
    arguments: Sequence[str],
    triggering_file: str | PathLike[str],
    *,
    invoker: ProcessInvoker | None = None,
    cwd: str | PathLike[str] | None = None,
    source: str | None = None,
    markers: Sequence[str] = DEFAULT_PROJECT_MARKERS,
) -> CheckReport:
    """Check ``triggering_file`` and replace the sink's diagnostics.

    Args:
        sink: Destination receiving the complete replacement set.
        binary: Checker executable.
        arguments: Checker arguments as configured by the user.
        triggering_file: File whose save/open/command triggered the run.
        invoker: Process capability; defaults to :class:`SubprocessInvoker`.
        cwd: Working directory override.
        source: Label attached to every diagnostic; defaults to the binary name.
        markers: Project root markers used when ``cwd`` is not given.

    Returns:
        CheckReport: Summary of what was published.
    """

    target = Path(triggering_file).absolute()
    working_dir = resolve_working_directory(target, cwd=cwd, markers=markers)
    active_invoker = invoker if invoker is not None else SubprocessInvoker()
    negotiated = collect_diagnostics(active_invoker, binary, arguments, working_dir)
    grouped = group_diagnostics(
        negotiated.diagnostics,
        source=source if source is not None else default_source_label(binary),
    )
    triggering_key = resolve_reported_path(str(target), working_dir)
    publish_diagnostics(sink, grouped, triggering_key)
    LOGGER.debug(
        "published %d file(s) via %s output after %d invocation(s)",
        len(grouped),
        negotiated.strategy.value,
        negotiated.invocation_count,
    )
    return CheckReport(
        triggering_file=triggering_key,
        cwd=working_dir,
        strategy=negotiated.strategy,
        invocation_count=negotiated.invocation_count,
        grouped=grouped,
        startup_error=negotiated.invocations[0].startup_error if negotiated.invocations else None,
    )


__all__ = [
    "CheckReport",
    "default_source_label",
    "resolve_working_directory",
    "run_check_and_report",
]
