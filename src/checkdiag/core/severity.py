# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    INFO = "info"


DEFAULT_SEVERITY: Final[Severity] = Severity.INFO

_KNOWN_SEVERITIES: Final[dict[str, Severity]] = {member.value: member for member in Severity}


def normalize_severity(value: object) -> Severity:
    """Return the :class:`Severity` matching ``value`` case-insensitively.

    Args:
        value: Untrusted severity token reported by the external tool. Any
            type is accepted; ``None`` and unrecognised tokens are tolerated.

    Returns:
        Severity: Matching severity, or :data:`DEFAULT_SEVERITY` when ``value``
        is absent or not one of the known tokens.
    """

    if value is None:
        return DEFAULT_SEVERITY
    if isinstance(value, Severity):
        return value
    return _KNOWN_SEVERITIES.get(str(value).lower(), DEFAULT_SEVERITY)


_SEVERITY_TO_LSP_LEVEL: Final[dict[Severity, int]] = {
    Severity.ERROR: 1,
    Severity.WARNING: 2,
    Severity.INFO: 3,
    Severity.NOTE: 4,
}


def severity_to_lsp(severity: Severity) -> int:
    """Map :class:`Severity` to the numeric level used by editor hosts.

    Args:
        severity: Severity value to translate.

    Returns:
        int: ``1`` (error) through ``4`` (hint); notes are rendered as hints.
    """

    return _SEVERITY_TO_LSP_LEVEL.get(severity, _SEVERITY_TO_LSP_LEVEL[DEFAULT_SEVERITY])


__all__ = [
    "DEFAULT_SEVERITY",
    "Severity",
    "normalize_severity",
    "severity_to_lsp",
]
