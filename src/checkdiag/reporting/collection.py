# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory :class:`DiagnosticSink` implementation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal

from ..core.models import HostDiagnostic
from ..core.severity import Severity
from ..interfaces.diagnostics import DiagnosticSink

SinkOperation = Literal["clear", "set"]


@dataclass(frozen=True, slots=True)
class SinkCall:
    """One recorded call made against a :class:`DiagnosticCollection`."""

    operation: SinkOperation
    file_path: str | None = None
    count: int = 0


@dataclass(slots=True)
class DiagnosticCollection(DiagnosticSink):
    """Keep the latest diagnostics per file and journal every update."""

    name: str = "checkdiag"
    _entries: dict[str, tuple[HostDiagnostic, ...]] = field(default_factory=dict)
    calls: list[SinkCall] = field(default_factory=list)

    def clear(self) -> None:
        self._entries.clear()
        self.calls.append(SinkCall("clear"))

    def set(self, file_path: str, diagnostics: Sequence[HostDiagnostic]) -> None:
        entries = tuple(diagnostics)
        if entries:
            self._entries[file_path] = entries
        else:
            self._entries.pop(file_path, None)
        self.calls.append(SinkCall("set", file_path, len(entries)))

    def get(self, file_path: str) -> tuple[HostDiagnostic, ...]:
        """Return the diagnostics currently held for ``file_path``."""
        return self._entries.get(file_path, ())

    def items(self) -> Iterator[tuple[str, tuple[HostDiagnostic, ...]]]:
        """Yield ``(file_path, diagnostics)`` pairs in insertion order."""
        yield from self._entries.items()

    def count(self, severity: Severity | None = None) -> int:
        """Return the number of diagnostics held, optionally for one severity."""
        return sum(
            1
            for diagnostics in self._entries.values()
            for diagnostic in diagnostics
            if severity is None or diagnostic.severity is severity
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._entries


__all__ = ["DiagnosticCollection", "SinkCall", "SinkOperation"]
