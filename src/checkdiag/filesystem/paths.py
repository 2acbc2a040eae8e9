# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for resolving the file references reported by external tools."""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
import re
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from types import ModuleType
from typing import Final
from urllib.parse import unquote

LOGGER = logging.getLogger(__name__)

_Pathish = str | PathLike[str] | Path

FILE_URI_PREFIX: Final[str] = "file://"
DEFAULT_PROJECT_MARKERS: Final[tuple[str, ...]] = (
    "vitte.toml",
    "vitte.json",
    "Cargo.toml",
    "package.json",
    ".git",
)
MAX_ROOT_SEARCH_DEPTH: Final[int] = 50

_DRIVE_LETTER: Final[re.Pattern[str]] = re.compile(r"^([a-z]):")
_URI_DRIVE_PREFIX: Final[re.Pattern[str]] = re.compile(r"^/[A-Za-z]:")
_MALFORMED_ESCAPE: Final[re.Pattern[str]] = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_case_insensitive_platform() -> bool:
    """Return ``True`` when the host filesystem folds path casing."""

    return os.name == "nt"


def _flavour(windows: bool | None) -> ModuleType:
    use_windows = is_case_insensitive_platform() if windows is None else windows
    return ntpath if use_windows else posixpath


def _decode_uri_component(text: str) -> str:
    """Percent-decode ``text`` strictly.

    Raises:
        ValueError: If ``text`` contains a malformed escape or the decoded
            bytes are not valid UTF-8.
    """

    if _MALFORMED_ESCAPE.search(text):
        raise ValueError(f"malformed percent escape in {text!r}")
    return unquote(text, errors="strict")


def strip_file_uri(reference: str, *, windows: bool | None = None) -> str:
    """Return ``reference`` without a ``file://`` scheme, percent-decoded.

    Decoding is best-effort: a malformed escape leaves the stripped text as is.
    """

    if not reference.startswith(FILE_URI_PREFIX):
        return reference
    stripped = reference[len(FILE_URI_PREFIX) :]
    try:
        decoded = _decode_uri_component(stripped)
    except ValueError:
        LOGGER.debug("could not decode file URI %r; using it undecoded", reference)
        decoded = stripped
    if _flavour(windows) is ntpath and _URI_DRIVE_PREFIX.match(decoded):
        decoded = decoded[1:]
    return decoded


def _fold_drive_letter(path: str) -> str:
    return _DRIVE_LETTER.sub(lambda match: f"{match.group(1).upper()}:", path)


def normalize_fs_case(path: str, *, windows: bool | None = None) -> str:
    """Return ``path`` normalised for use as a grouping key.

    On case-insensitive platforms the drive letter is upper-cased so the same
    file reported as ``c:\\x`` and ``C:\\x`` lands in one bucket. The path is
    not required to exist; a failed existence probe only skips the debug note.

    Args:
        path: Absolute or relative path to normalise.
        windows: Force Windows (``True``) or POSIX (``False``) semantics;
            defaults to the running platform.

    Returns:
        str: Normalised path.
    """

    flavour = _flavour(windows)
    if flavour is posixpath:
        return posixpath.normpath(path)
    folded = ntpath.normpath(_fold_drive_letter(path))
    try:
        exists = os.path.exists(folded)
    except (OSError, ValueError):
        exists = False
    if not exists:
        LOGGER.debug("reported path %s does not exist; keeping its lexical form", folded)
    return folded


def resolve_reported_path(reference: str, cwd: _Pathish, *, windows: bool | None = None) -> str:
    """Turn a tool-reported file reference into a canonical absolute path.

    Args:
        reference: Relative, absolute or ``file://`` reference from the tool.
        cwd: Directory the tool was run in; relative references resolve
            against it.
        windows: Force Windows or POSIX path semantics (defaults to the
            running platform).

    Returns:
        str: Canonical absolute path usable as a grouping key.
    """

    flavour = _flavour(windows)
    candidate = strip_file_uri(reference, windows=windows)
    if not flavour.isabs(candidate):
        base = os.fspath(cwd)
        if flavour is os.path:
            base = os.path.abspath(base)
        candidate = flavour.join(base, candidate)
    return normalize_fs_case(candidate, windows=windows)


def find_project_root(
    start: _Pathish,
    *,
    markers: Sequence[str] = DEFAULT_PROJECT_MARKERS,
    max_depth: int = MAX_ROOT_SEARCH_DEPTH,
) -> Path | None:
    """Walk upwards from ``start`` looking for a directory holding a marker.

    Args:
        start: File or directory to begin the search from.
        markers: File or directory names identifying a project root.
        max_depth: Maximum number of directories inspected.

    Returns:
        Path | None: First directory containing any marker, else ``None``.
    """

    origin = Path(start)
    try:
        directory = origin if origin.is_dir() else origin.parent
    except OSError:
        directory = origin.parent
    for _ in range(max_depth):
        for marker in markers:
            try:
                if (directory / marker).exists():
                    return directory
            except OSError:
                continue
        parent = directory.parent
        if parent == directory:
            break
        directory = parent
    return None


def display_relative_path(path: _Pathish, root: _Pathish) -> str:
    """Return ``path`` relative to ``root`` when it lives below it.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Relative POSIX path when possible, otherwise ``path`` unchanged.
    """

    try:
        return Path(path).relative_to(Path(root)).as_posix()
    except ValueError:
        return os.fspath(path)


__all__ = (
    "DEFAULT_PROJECT_MARKERS",
    "FILE_URI_PREFIX",
    "MAX_ROOT_SEARCH_DEPTH",
    "display_relative_path",
    "find_project_root",
    "is_case_insensitive_platform",
    "normalize_fs_case",
    "resolve_reported_path",
    "strip_file_uri",
)
