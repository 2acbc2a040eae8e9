# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing how the external checker is invoked."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Captured outcome of one external process invocation.

    Attributes:
        stdout: Captured standard output text.
        stderr: Captured standard error text.
        exit_status: Exit status, or ``None`` when the process never exited
            normally (startup failure, timeout, signal).
        startup_error: Error raised while starting the process, if any.
    """

    stdout: str = ""
    stderr: str = ""
    exit_status: int | None = None
    startup_error: BaseException | None = None

    @property
    def started(self) -> bool:
        """Return ``True`` when the process could be launched."""
        return self.startup_error is None

    def combined_output(self) -> str:
        """Return non-empty stdout and stderr joined by a newline."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


@runtime_checkable
class ProcessInvoker(Protocol):
    """Run an external program and capture its output."""

    @abstractmethod
    def invoke(self, binary: str, arguments: Sequence[str], cwd: Path) -> InvocationResult:
        """Run ``binary`` with ``arguments`` inside ``cwd``.

        Implementations must not raise for startup failures or timeouts;
        those are reported through :class:`InvocationResult`.
        """
        raise NotImplementedError


__all__ = ["InvocationResult", "ProcessInvoker"]
