# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Negotiate between structured and text output of the external checker."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from ..core.models import Diagnostic
from ..interfaces.process import InvocationResult, ProcessInvoker
from ..parsers.base import is_likely_json
from ..parsers.structured import try_parse_json_diagnostics
from ..parsers.text import parse_text_diagnostics

LOGGER = logging.getLogger(__name__)

FORMAT_FLAG: Final[str] = "--format"
JSON_FORMAT_ARGUMENT: Final[str] = f"{FORMAT_FLAG}=json"


class OutputStrategy(str, Enum):
    """Parser that produced the diagnostics of a run."""

    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class JsonArguments:
    """Arguments for the structured attempt and whether a flag was injected."""

    arguments: tuple[str, ...]
    added_format: bool


@dataclass(slots=True)
class NegotiationResult:
    """Diagnostics of one check run plus how they were obtained."""

    diagnostics: list[Diagnostic]
    strategy: OutputStrategy
    invocations: list[InvocationResult] = field(default_factory=list)

    @property
    def invocation_count(self) -> int:
        """Return the number of checker processes launched for the run."""
        return len(self.invocations)


def has_format_flag(arguments: Sequence[str]) -> bool:
    """Return ``True`` when ``arguments`` already choose an output format."""

    return any(arg == FORMAT_FLAG or arg.startswith(f"{FORMAT_FLAG}=") for arg in arguments)


def build_args_for_json(arguments: Sequence[str]) -> JsonArguments:
    """Return arguments requesting JSON output without touching ``arguments``.

    Args:
        arguments: Caller-supplied checker arguments.

    Returns:
        JsonArguments: A copy of ``arguments``, with ``--format=json`` appended
        unless the caller already passed a ``--format`` flag.
    """

    if has_format_flag(arguments):
        return JsonArguments(arguments=tuple(arguments), added_format=False)
    return JsonArguments(arguments=(*arguments, JSON_FORMAT_ARGUMENT), added_format=True)


def _safe_invoke(invoker: ProcessInvoker, binary: str, arguments: Sequence[str], cwd: Path) -> InvocationResult:
    """Invoke the checker, folding launch errors into the result."""

    try:
        return invoker.invoke(binary, list(arguments), cwd)
    except (OSError, ValueError) as exc:
        return InvocationResult(exit_status=None, startup_error=exc)


def collect_diagnostics(
    invoker: ProcessInvoker,
    binary: str,
    arguments: Sequence[str],
    cwd: Path,
) -> NegotiationResult:
    """Run the checker and parse its output with the best available parser.

    The checker is first asked for JSON. Output that starts with ``{`` or
    ``[`` and decodes is used as is, even when it lists no diagnostics.
    Otherwise the run falls back to the text grammar: when ``--format=json``
    was injected the checker is run a second time with the caller's original
    arguments, else the output already captured is parsed. A checker that
    cannot be started is never re-run.

    Args:
        invoker: Capability used to launch the checker.
        binary: Checker executable.
        arguments: Caller-supplied arguments; never mutated.
        cwd: Working directory for the checker and for relative paths.

    Returns:
        NegotiationResult: Parsed diagnostics, the strategy used and the
        captured invocations (at most two).
    """

    plan = build_args_for_json(arguments)
    first = _safe_invoke(invoker, binary, plan.arguments, cwd)
    invocations = [first]

    if first.started and is_likely_json(first.stdout):
        parsed = try_parse_json_diagnostics(first.stdout, cwd)
        if parsed is not None:
            LOGGER.debug("structured output from %s: %d diagnostic(s)", binary, len(parsed))
            return NegotiationResult(diagnostics=parsed, strategy=OutputStrategy.JSON, invocations=invocations)

    fallback = first
    if not first.started:
        LOGGER.debug("%s could not be started: %s", binary, first.startup_error)
    elif plan.added_format:
        LOGGER.debug("re-running %s without %s for text output", binary, JSON_FORMAT_ARGUMENT)
        fallback = _safe_invoke(invoker, binary, arguments, cwd)
        invocations.append(fallback)

    diagnostics = parse_text_diagnostics(fallback.combined_output(), cwd)
    LOGGER.debug("text output from %s: %d diagnostic(s)", binary, len(diagnostics))
    return NegotiationResult(diagnostics=diagnostics, strategy=OutputStrategy.TEXT, invocations=invocations)


__all__ = [
    "FORMAT_FLAG",
    "JSON_FORMAT_ARGUMENT",
    "JsonArguments",
    "NegotiationResult",
    "OutputStrategy",
    "build_args_for_json",
    "collect_diagnostics",
    "has_format_flag",
]
