# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from checkdiag.interfaces.process import InvocationResult


@dataclass
class FakeInvoker:
    """Replay canned invocation results and record every call."""

    responses: list[InvocationResult]
    calls: list[tuple[str, tuple[str, ...], Path]] = field(default_factory=list)

    def invoke(self, binary: str, arguments: Sequence[str], cwd: Path) -> InvocationResult:
        self.calls.append((binary, tuple(arguments), cwd))
        index = min(len(self.calls), len(self.responses)) - 1
        return self.responses[index]


@pytest.fixture
def fake_invoker() -> Callable[..., FakeInvoker]:
    """Return a factory building :class:`FakeInvoker` instances."""

    def _factory(*responses: InvocationResult) -> FakeInvoker:
        return FakeInvoker(list(responses))

    return _factory


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project directory marked as a root, holding ``src/main.x``."""

    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "src" / "main.x").write_text("fn main() {}\n", encoding="utf-8")
    return root
