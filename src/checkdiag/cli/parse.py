# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""The ``parse`` command: normalize already captured checker output."""

from __future__ import annotations

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import typer

from ..core.models import Diagnostic
from ..core.serialization import jsonify
from ..parsers.base import is_likely_json
from ..parsers.structured import try_parse_json_diagnostics
from ..parsers.text import parse_text_diagnostics
from .shared import CLIError, build_cli_logger

STDIN_MARKER: Final[str] = "-"


class InputFormat(str, Enum):
    """How captured output should be interpreted."""

    AUTO = "auto"
    JSON = "json"
    TEXT = "text"


def parse_captured_output(text: str, cwd: Path, input_format: InputFormat = InputFormat.AUTO) -> list[Diagnostic]:
    """Parse ``text`` with the parser chosen by ``input_format``.

    ``auto`` applies the JSON-first rule used for live runs: JSON-looking
    text that decodes is parsed structurally, anything else as text.

    Raises:
        CLIError: If ``json`` was requested and ``text`` does not decode.
    """

    if input_format is InputFormat.TEXT:
        return parse_text_diagnostics(text, cwd)
    if input_format is InputFormat.JSON or is_likely_json(text):
        parsed = try_parse_json_diagnostics(text, cwd)
        if parsed is not None:
            return parsed
        if input_format is InputFormat.JSON:
            raise CLIError("input is not valid JSON")
    return parse_text_diagnostics(text, cwd)


def _read_source(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise CLIError(f"cannot read {source}: {exc}") from exc


def parse_command(
    source: Annotated[str, typer.Argument(help="File holding captured output, or '-' for stdin.")] = STDIN_MARKER,
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Directory relative paths resolve against (default: current directory)."),
    ] = None,
    input_format: Annotated[InputFormat, typer.Option("--format", "-f", help="Input format.")] = InputFormat.AUTO,
) -> None:
    """Print the diagnostics found in captured checker output as JSON."""

    logger = build_cli_logger(emoji=False)
    base = (cwd or Path.cwd()).absolute()
    try:
        diagnostics = parse_captured_output(_read_source(source), base, input_format)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    logger.echo(json.dumps(jsonify(diagnostics), indent=2))


__all__ = ["InputFormat", "parse_captured_output", "parse_command"]
