# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Runtime helpers for running the external checker."""

from __future__ import annotations

from .process import (
    CommandOptions,
    CommandTimeoutError,
    SubprocessExecutionError,
    SubprocessInvoker,
    run_command,
)

__all__ = [
    "CommandOptions",
    "CommandTimeoutError",
    "SubprocessExecutionError",
    "SubprocessInvoker",
    "run_command",
]
