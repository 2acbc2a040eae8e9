# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem utilities for path handling."""

from __future__ import annotations

from .paths import (
    display_relative_path,
    find_project_root,
    normalize_fs_case,
    resolve_reported_path,
    strip_file_uri,
)

__all__ = [
    "display_relative_path",
    "find_project_root",
    "normalize_fs_case",
    "resolve_reported_path",
    "strip_file_uri",
]
