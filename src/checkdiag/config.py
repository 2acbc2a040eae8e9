# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the checkdiag package."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.runtime.process import DEFAULT_TIMEOUT_SECONDS
from .filesystem.paths import DEFAULT_PROJECT_MARKERS

DEFAULT_BINARY: Final[str] = "vitc"
DEFAULT_CHECK_ARGS: Final[tuple[str, ...]] = ("check",)


class CheckdiagError(Exception):
    """Base class for errors raised by checkdiag."""


class ConfigError(CheckdiagError):
    """Raised when configuration input is invalid."""


class CheckConfig(BaseModel):
    """Settings controlling how the checker is run and labelled."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    binary: str = DEFAULT_BINARY
    check_args: list[str] = Field(default_factory=lambda: list(DEFAULT_CHECK_ARGS))
    enable_diagnostics: bool = True
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    project_markers: list[str] = Field(default_factory=lambda: list(DEFAULT_PROJECT_MARKERS))
    source: str | None = None

    @field_validator("binary")
    @classmethod
    def _require_binary(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("binary must not be empty")
        return value.strip()

    @field_validator("timeout")
    @classmethod
    def _non_negative_timeout(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("timeout must be non-negative")
        return value


__all__ = [
    "DEFAULT_BINARY",
    "DEFAULT_CHECK_ARGS",
    "CheckConfig",
    "CheckdiagError",
    "ConfigError",
]
