# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing where normalized diagnostics are delivered."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..core.models import HostDiagnostic


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receive complete replacement sets of diagnostics per file."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every previously reported diagnostic."""
        raise NotImplementedError

    @abstractmethod
    def set(self, file_path: str, diagnostics: Sequence[HostDiagnostic]) -> None:
        """Replace the diagnostics reported for exactly ``file_path``.

        Args:
            file_path: Canonical absolute path of the file.
            diagnostics: Diagnostics to show for the file; an empty sequence
                clears it.
        """
        raise NotImplementedError


__all__ = ["DiagnosticSink"]
