# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Capability interfaces implemented by hosts embedding the check pipeline."""

from __future__ import annotations

from .diagnostics import DiagnosticSink
from .process import InvocationResult, ProcessInvoker

__all__ = ["DiagnosticSink", "InvocationResult", "ProcessInvoker"]
