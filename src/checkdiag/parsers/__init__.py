# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public parser exports for converting checker output into diagnostics."""

from __future__ import annotations

from .base import LineRule, StructuredOutputError, is_likely_json
from .structured import parse_json_diagnostics, try_parse_json_diagnostics
from .text import build_line_rules, parse_text_diagnostics

__all__ = [
    "LineRule",
    "StructuredOutputError",
    "build_line_rules",
    "is_likely_json",
    "parse_json_diagnostics",
    "parse_text_diagnostics",
    "try_parse_json_diagnostics",
]
