# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for resolving tool-reported file references."""

from __future__ import annotations

from pathlib import Path

from checkdiag.filesystem.paths import (
    display_relative_path,
    find_project_root,
    normalize_fs_case,
    resolve_reported_path,
    strip_file_uri,
)


def test_relative_reference_resolves_against_cwd(tmp_path: Path) -> None:
    resolved = resolve_reported_path("src/../src/main.x", tmp_path, windows=False)

    assert resolved == str(tmp_path / "src" / "main.x")


def test_absolute_reference_is_kept(tmp_path: Path) -> None:
    assert resolve_reported_path("/opt/lib/util.x", tmp_path, windows=False) == "/opt/lib/util.x"


def test_file_uri_is_stripped_and_decoded(tmp_path: Path) -> None:
    resolved = resolve_reported_path("file:///work/my%20project/a.x", tmp_path, windows=False)

    assert resolved == "/work/my project/a.x"


def test_malformed_uri_escape_keeps_raw_text() -> None:
    assert strip_file_uri("file:///work/100%/a.x", windows=False) == "/work/100%/a.x"
    assert strip_file_uri("file:///work/%ff.x", windows=False) == "/work/%ff.x"


def test_windows_uri_drops_leading_slash() -> None:
    assert strip_file_uri("file:///c:/src/a.x", windows=True) == "c:/src/a.x"


def test_windows_drive_letter_is_upper_cased() -> None:
    assert normalize_fs_case("c:/Src/./a.x", windows=True) == "C:\\Src\\a.x"


def test_windows_relative_reference_joins_cwd() -> None:
    assert resolve_reported_path("src\\a.x", "d:\\proj", windows=True) == "D:\\proj\\src\\a.x"


def test_posix_paths_are_not_case_folded() -> None:
    assert normalize_fs_case("/Work//A.x", windows=False) == "/Work/A.x"


def test_find_project_root_walks_upwards(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    nested = root / "pkg" / "deep"
    nested.mkdir(parents=True)
    (root / "vitte.toml").write_text("", encoding="utf-8")
    target = nested / "file.x"
    target.write_text("", encoding="utf-8")

    assert find_project_root(target) == root


def test_find_project_root_respects_markers(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested, markers=("no-such-marker",), max_depth=3) is None


def test_display_relative_path(tmp_path: Path) -> None:
    assert display_relative_path(tmp_path / "src" / "a.x", tmp_path) == "src/a.x"
    assert display_relative_path("/elsewhere/a.x", tmp_path) == "/elsewhere/a.x"
