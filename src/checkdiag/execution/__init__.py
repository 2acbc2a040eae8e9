# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checker invocation, output negotiation and the end-to-end check pipeline."""

from __future__ import annotations

from .check import CheckReport, resolve_working_directory, run_check_and_report
from .negotiator import (
    FORMAT_FLAG,
    JSON_FORMAT_ARGUMENT,
    JsonArguments,
    NegotiationResult,
    OutputStrategy,
    build_args_for_json,
    collect_diagnostics,
    has_format_flag,
)

__all__ = [
    "FORMAT_FLAG",
    "JSON_FORMAT_ARGUMENT",
    "CheckReport",
    "JsonArguments",
    "NegotiationResult",
    "OutputStrategy",
    "build_args_for_json",
    "collect_diagnostics",
    "has_format_flag",
    "resolve_working_directory",
    "run_check_and_report",
]
