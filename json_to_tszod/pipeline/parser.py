"""
JSON parser with diagnostics.

Wraps json.loads to report syntax errors with their line and column, and
to warn about inputs large enough to slow the pipeline down.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from .analyzer.ir_nodes import Diagnostic, DiagnosticLevel

# Inputs above 1 MiB get a performance warning
SIZE_LIMIT = 1024 * 1024


# A string literal, or a bare constant the json module accepts but JSON does not
_CONSTANT_PATTERN = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)')


class _InvalidConstant(ValueError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


def _reject_constant(name: str) -> Any:
    raise _InvalidConstant(name)


def _decode(text: str) -> Any:
    """json.loads, with NaN and Infinity reported as syntax errors at their position."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except _InvalidConstant as e:
        # The decoder stops at the first bare constant outside a string
        position = next(
            (match.start(1) for match in _CONSTANT_PATTERN.finditer(text) if match.group(1)),
            0,
        )
        raise json.JSONDecodeError(f"{e.name} is not valid JSON", text, position) from None


@dataclass
class ParseResult:
    """Parsed value, or None when parsing failed or the input was empty."""

    value: Any = None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def parse_json(text: str) -> ParseResult:
    """
    Parse JSON text.

    Args:
        text: The JSON source

    Returns:
        ParseResult with the parsed value (None on error) and diagnostics
    """
    if not text.strip():
        return ParseResult()

    diagnostics = []

    size = len(text.encode("utf-8"))
    if size > SIZE_LIMIT:
        diagnostics.append(
            Diagnostic(
                level=DiagnosticLevel.WARNING,
                message=f"Input is {size / 1024 / 1024:.1f}MB. Large inputs may slow down processing.",
            )
        )

    try:
        value = _decode(text)
    except json.JSONDecodeError as e:
        diagnostics.append(
            Diagnostic(
                level=DiagnosticLevel.ERROR,
                message=f"JSON parse error (line {e.lineno}, column {e.colno}): {e.msg}",
            )
        )
        return ParseResult(value=None, diagnostics=diagnostics)
    except RecursionError:
        # The stdlib decoder recurses once per nesting level
        diagnostics.append(Diagnostic(level=DiagnosticLevel.ERROR, message="JSON parse error: input is nested too deeply."))
        return ParseResult(value=None, diagnostics=diagnostics)

    diagnostics.append(Diagnostic(level=DiagnosticLevel.INFO, message="JSON parsed successfully."))
    return ParseResult(value=value, diagnostics=diagnostics)
