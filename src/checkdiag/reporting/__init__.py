# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Grouping, sinks and rendering of normalized diagnostics."""

from __future__ import annotations

from .collection import DiagnosticCollection, SinkCall
from .grouping import GroupedDiagnostics, group_diagnostics, publish_diagnostics, to_host_diagnostic
from .output import render_json, render_pretty

__all__ = [
    "DiagnosticCollection",
    "GroupedDiagnostics",
    "SinkCall",
    "group_diagnostics",
    "publish_diagnostics",
    "render_json",
    "render_pretty",
    "to_host_diagnostic",
]
