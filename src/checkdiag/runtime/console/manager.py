# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for diagnostic listings, status lines and debug logs."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal, TextIO

from rich.console import Console

ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (stdout by default) is a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one :class:`Console` per output stream and presentation mode."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console writing to stdout (or stderr) with these settings.

        Colour is only enabled when requested *and* the stream is a terminal,
        so piped diagnostics never carry ANSI escapes.
        """

        tty = detect_tty(sys.stderr if stderr else sys.stdout)
        key = (color, emoji, stderr, tty)
        console = self._consoles.get(key)
        if console is None:
            colorize = color and tty
            color_system: ColorSystem | None = "auto" if colorize else None
            console = Console(
                stderr=stderr,
                color_system=color_system,
                force_terminal=tty,
                no_color=not colorize,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["ColorSystem", "RichConsoleManager", "detect_tty", "get_console_manager"]
