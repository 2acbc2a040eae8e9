# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""The ``check`` command: run the checker for a file and report its diagnostics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import typer

from ..config import CheckConfig, ConfigError
from ..config_loader import load_config
from ..core.runtime.process import SubprocessInvoker
from ..core.severity import Severity
from ..execution.check import CheckReport, resolve_working_directory, run_check_and_report
from ..interfaces.process import ProcessInvoker
from ..reporting.collection import DiagnosticCollection
from ..reporting.output import render_json, render_pretty
from ..runtime.console.manager import get_console_manager
from .shared import CLIError, CLILogger, build_cli_logger

CONFIG_ERROR_EXIT: Final[int] = 2


class OutputMode(str, Enum):
    """Output renderings supported by the CLI."""

    PRETTY = "pretty"
    JSON = "json"


@dataclass(slots=True)
class CheckOptions:
    """Normalised inputs of the ``check`` command."""

    file: Path
    root: Path | None = None
    binary: str | None = None
    arguments: tuple[str, ...] | None = None
    timeout: float | None = None
    output: OutputMode = OutputMode.PRETTY
    color: bool = True


def _effective_config(options: CheckOptions, project_root: Path) -> CheckConfig:
    overrides = {
        "binary": options.binary,
        "check_args": list(options.arguments) if options.arguments else None,
        "timeout": options.timeout,
    }
    try:
        return load_config(project_root, overrides=overrides)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=CONFIG_ERROR_EXIT) from exc


def _report(report: CheckReport, collection: DiagnosticCollection, options: CheckOptions, logger: CLILogger) -> None:
    if options.output is OutputMode.JSON:
        logger.echo(render_json(collection.items()))
        return
    console = get_console_manager().get(color=options.color, emoji=False)
    printed = render_pretty(console, collection.items(), root=report.cwd, color=options.color)
    if printed:
        logger.info(f"{printed} diagnostic(s) in {len(collection)} file(s) ({report.strategy.value} output)")
    else:
        logger.ok("No diagnostics reported")


def run_check(
    options: CheckOptions,
    *,
    logger: CLILogger,
    invoker: ProcessInvoker | None = None,
) -> int:
    """Run the check pipeline for ``options`` and return the exit status.

    Returns:
        int: ``1`` when an error-severity diagnostic was reported or the
        checker could not be started, else ``0``.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """

    target = options.file.absolute()
    project_root = options.root.absolute() if options.root is not None else resolve_working_directory(target)
    cfg = _effective_config(options, project_root)
    if not cfg.enable_diagnostics:
        logger.info("Diagnostics are disabled by configuration")
        return 0

    collection = DiagnosticCollection()
    report = run_check_and_report(
        collection,
        cfg.binary,
        cfg.check_args,
        target,
        invoker=invoker if invoker is not None else SubprocessInvoker(timeout=cfg.timeout),
        cwd=options.root,
        source=cfg.source,
        markers=cfg.project_markers,
    )
    if report.startup_error is not None:
        logger.warn(f"Could not start {cfg.binary}: {report.startup_error}")
        return 1
    _report(report, collection, options, logger)
    return 1 if collection.count(Severity.ERROR) else 0


def _normalize_arguments(values: Sequence[str] | None) -> tuple[str, ...] | None:
    if not values:
        return None
    return tuple(value for value in values if value)


def check_command(
    file: Annotated[Path, typer.Argument(help="File whose check triggered the run.")],
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Working directory for the checker (default: detected project root)."),
    ] = None,
    binary: Annotated[str | None, typer.Option("--bin", help="Checker executable.")] = None,
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Checker argument (repeatable; use --arg=--flag for dashes)."),
    ] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Seconds before the checker is killed.")] = None,
    output: Annotated[OutputMode, typer.Option("--output", "-o", help="Output rendering.")] = OutputMode.PRETTY,
    debug: Annotated[bool, typer.Option("--debug", help="Show debug logging on stderr.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")] = True,
) -> None:
    """Run the checker for FILE and print the normalized diagnostics."""

    logger = build_cli_logger(emoji=emoji, debug=debug, no_color=no_color)
    options = CheckOptions(
        file=file,
        root=root,
        binary=binary,
        arguments=_normalize_arguments(arg),
        timeout=timeout,
        output=output,
        color=not no_color,
    )
    try:
        exit_code = run_check(options, logger=logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=exit_code)


__all__ = ["CheckOptions", "OutputMode", "check_command", "run_check"]
