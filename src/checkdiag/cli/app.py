# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .check import check_command
from .parse import parse_command

app = typer.Typer(
    help="Normalise compiler check output into per-file diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)
app.command(name="check")(check_command)
app.command(name="parse")(parse_command)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
