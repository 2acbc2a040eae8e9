# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the checkdiag package."""

from __future__ import annotations

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

from .severity import Severity, normalize_severity

DiagnosticCode: TypeAlias = str | int | float


class Position(BaseModel):
    """A 1-based ``(line, column)`` pair as reported by the external tool."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class Range(BaseModel):
    """Start position plus an optional end position, both 1-based."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position | None = None


class Diagnostic(BaseModel):
    """Normalized diagnostic produced by either parser."""

    model_config = ConfigDict(validate_assignment=True)

    file: str
    message: str = ""
    severity: Severity = Severity.INFO
    code: DiagnosticCode | None = None
    range: Range | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value: object) -> Severity:
        """Fold any severity token onto the four known levels."""
        return normalize_severity(value)


class RenderPosition(BaseModel):
    """A 0-based position in the host's coordinate convention."""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int


class RenderRange(BaseModel):
    """A well-formed, non-empty 0-based range handed to the sink."""

    model_config = ConfigDict(frozen=True)

    start: RenderPosition
    end: RenderPosition


class HostDiagnostic(BaseModel):
    """Diagnostic in the shape a diagnostics sink renders."""

    model_config = ConfigDict(frozen=True)

    range: RenderRange
    message: str
    severity: Severity
    code: str | None = None
    source: str | None = None


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "HostDiagnostic",
    "Position",
    "Range",
    "RenderPosition",
    "RenderRange",
]
