# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shlex
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ...interfaces.process import InvocationResult, ProcessInvoker

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = False


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CommandTimeoutError(RuntimeError):
    """Raised when a subprocess is killed after exceeding its timeout."""

    def __init__(self, command: Sequence[str], timeout: float | None, stdout: str, stderr: str) -> None:
        message = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        super().__init__(message)
        self.command = tuple(command)
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text, treating ``None`` as empty output."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str], cwd: Path | None = None) -> list[str]:
    """Normalise the subprocess argument sequence.

    Bare executable names are looked up on ``PATH``; relative paths with a
    directory component resolve against ``cwd``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be located.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]
    if len(head_path.parts) > 1 and cwd is not None:
        head_path = cwd / head_path

    resolved = shutil.which(str(head_path))
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        PermissionError: If the executable cannot be run.
        CommandTimeoutError: When the process exceeds ``options.timeout``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args, resolved_options.cwd)

    try:
        # Bandit: the binary comes from user configuration; we pass argument
        # lists directly without shell expansion.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - controlled arguments, not user supplied
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(
            normalized,
            resolved_options.timeout,
            _ensure_text(exc.stdout),
            _ensure_text(exc.stderr),
        ) from exc

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


@dataclass(slots=True)
class SubprocessInvoker(ProcessInvoker):
    """Default :class:`ProcessInvoker` backed by :func:`run_command`.

    Startup failures and timeouts are reported through the returned
    :class:`InvocationResult` instead of being raised.
    """

    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    env: Mapping[str, str] | None = None

    def invoke(self, binary: str, arguments: Sequence[str], cwd: Path) -> InvocationResult:
        command = [binary, *arguments]
        LOGGER.debug("invoking command=%s cwd=%s", shlex.join(command), cwd)
        options = CommandOptions(
            cwd=cwd,
            env=self.env,
            check=False,
            capture_output=True,
            timeout=self.timeout,
            discard_stdin=True,
        )
        try:
            completed = run_command(command, options=options)
        except CommandTimeoutError as exc:
            LOGGER.debug("command %s: %s", binary, exc)
            stderr = f"{exc.stderr}\n{exc}" if exc.stderr else str(exc)
            return InvocationResult(stdout=exc.stdout, stderr=stderr, exit_status=None)
        except (OSError, ValueError) as exc:
            LOGGER.debug("could not start %s: %s", binary, exc)
            return InvocationResult(exit_status=None, startup_error=exc)
        return InvocationResult(
            stdout=_ensure_text(completed.stdout),
            stderr=_ensure_text(completed.stderr),
            exit_status=completed.returncode,
        )


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "CommandOptions",
    "CommandTimeoutError",
    "SubprocessExecutionError",
    "SubprocessInvoker",
    "run_command",
]
