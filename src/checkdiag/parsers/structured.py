# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the checker's structured (JSON) diagnostic output."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from os import PathLike

from ..core.models import Diagnostic, DiagnosticCode
from ..core.ranges import range_from_record
from ..core.serialization import JsonValue, coerce_optional_str
from ..core.severity import normalize_severity
from ..filesystem.paths import resolve_reported_path
from .base import StructuredOutputError, iter_dicts, load_json_payload

LOGGER = logging.getLogger(__name__)

DIAGNOSTICS_KEY = "diagnostics"


def _diagnostic_records(payload: JsonValue) -> list[Mapping[str, JsonValue]]:
    """Return the record list from a bare list or a ``{"diagnostics": [...]}`` object."""

    if isinstance(payload, list):
        return list(iter_dicts(payload))
    if isinstance(payload, Mapping):
        nested = payload.get(DIAGNOSTICS_KEY)
        if isinstance(nested, list):
            return list(iter_dicts(nested))
    return []


def _coerce_code(value: JsonValue) -> DiagnosticCode | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (str, int, float)):
        return value
    return json.dumps(value, sort_keys=True)


def _message_for(record: Mapping[str, JsonValue]) -> str:
    raw = record.get("message")
    if raw is None:
        raw = record.get("msg")
    return coerce_optional_str(raw) or ""


def diagnostic_from_record(
    record: Mapping[str, JsonValue],
    cwd: str | PathLike[str],
) -> Diagnostic | None:
    """Build a :class:`Diagnostic` from one structured record.

    Args:
        record: Loosely typed mapping decoded from the tool's JSON output.
        cwd: Directory relative file references resolve against.

    Returns:
        Diagnostic | None: Normalized diagnostic, or ``None`` when the record
        carries no usable ``file`` string.
    """

    reference = record.get("file")
    if not isinstance(reference, str) or not reference:
        LOGGER.debug("dropping structured record without a file reference: %r", record)
        return None
    return Diagnostic(
        file=resolve_reported_path(reference, cwd),
        message=_message_for(record),
        severity=normalize_severity(record.get("severity")),
        code=_coerce_code(record.get("code")),
        range=range_from_record(record),
    )


def diagnostics_from_payload(payload: JsonValue, cwd: str | PathLike[str]) -> list[Diagnostic]:
    """Convert an already decoded payload into diagnostics."""

    results: list[Diagnostic] = []
    for record in _diagnostic_records(payload):
        diagnostic = diagnostic_from_record(record, cwd)
        if diagnostic is not None:
            results.append(diagnostic)
    return results


def try_parse_json_diagnostics(text: str, cwd: str | PathLike[str]) -> list[Diagnostic] | None:
    """Parse ``text`` as structured output, distinguishing decode failures.

    Returns:
        list[Diagnostic] | None: Parsed diagnostics (possibly empty, meaning
        the tool reported no problems), or ``None`` when ``text`` is not
        valid JSON.
    """

    try:
        payload = load_json_payload(text)
    except StructuredOutputError as exc:
        LOGGER.debug("%s", exc)
        return None
    return diagnostics_from_payload(payload, cwd)


def parse_json_diagnostics(text: str, cwd: str | PathLike[str]) -> Sequence[Diagnostic]:
    """Parse structured tool output, returning an empty list when undecodable."""

    return try_parse_json_diagnostics(text, cwd) or []


__all__ = [
    "DIAGNOSTICS_KEY",
    "diagnostic_from_record",
    "diagnostics_from_payload",
    "parse_json_diagnostics",
    "try_parse_json_diagnostics",
]
