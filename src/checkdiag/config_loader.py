# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration loading (defaults, pyproject, project file, env)."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import CheckConfig, ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "checkdiag"
PROJECT_CONFIG_FILENAME: Final[str] = ".checkdiag.toml"
ENV_BINARY: Final[str] = "CHECKDIAG_BIN"
ENV_TIMEOUT: Final[str] = "CHECKDIAG_TIMEOUT"


def _read_toml(path: Path) -> Mapping[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


def load_pyproject_section(root: Path) -> dict[str, Any]:
    """Return ``[tool.checkdiag]`` from ``root/pyproject.toml`` (or nothing)."""

    data = _read_toml(root / PYPROJECT_FILENAME)
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {root / PYPROJECT_FILENAME} must be a table")
    return dict(section)


def load_project_file(root: Path) -> dict[str, Any]:
    """Return the contents of ``root/.checkdiag.toml`` (or nothing)."""

    return dict(_read_toml(root / PROJECT_CONFIG_FILENAME))


def load_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Return overrides taken from ``CHECKDIAG_*`` environment variables."""

    overrides: dict[str, Any] = {}
    binary = env.get(ENV_BINARY, "").strip()
    if binary:
        overrides["binary"] = binary
    timeout = env.get(ENV_TIMEOUT, "").strip()
    if timeout:
        try:
            overrides["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {timeout!r}") from exc
    return overrides


def load_config(
    root: Path,
    *,
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> CheckConfig:
    """Build the effective :class:`CheckConfig` for ``root``.

    Later layers win: defaults, ``[tool.checkdiag]`` in ``pyproject.toml``,
    ``.checkdiag.toml``, ``CHECKDIAG_BIN``/``CHECKDIAG_TIMEOUT`` and finally
    ``overrides`` (entries set to ``None`` are ignored).

    Raises:
        ConfigError: If a source cannot be read or holds invalid values.
    """

    merged: dict[str, Any] = {}
    layers = (
        ("pyproject.toml", load_pyproject_section(root)),
        (PROJECT_CONFIG_FILENAME, load_project_file(root)),
        ("environment", load_env_overrides(os.environ if env is None else env)),
        ("overrides", {key: value for key, value in (overrides or {}).items() if value is not None}),
    )
    for name, fragment in layers:
        merged.update(fragment)
        try:
            CheckConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration from {name}: {exc}") from exc
    return CheckConfig.model_validate(merged)


__all__ = [
    "ENV_BINARY",
    "ENV_TIMEOUT",
    "PROJECT_CONFIG_FILENAME",
    "load_config",
    "load_env_overrides",
    "load_project_file",
    "load_pyproject_section",
]
