"""Raw/export rendering of a view's structured data.

Serializes the payload a view attaches to its load result (or its rendered
lines when it has none) as indented JSON, one record per screen line, and
colorizes it with pygments.
"""

from __future__ import annotations

import json
from decimal import Decimal

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..ansi import strip_ansi

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, TerminalFormatter] = {}


def json_default(value: object) -> object:
    """``json.dumps`` hook for values JSON has no native form for."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, "__dict__"):
        return vars(value)
    return str(value)


def _plain(value: object) -> object:
    # Rendered lines carry styling that is noise in a data dump.
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return [strip_ansi(item) for item in value]
    return value


def serialize_lines(value: object) -> list[str]:
    """Return ``value`` as indented JSON split into lines."""
    return json.dumps(_plain(value), indent=2, default=json_default, ensure_ascii=False).split("\n")


def normalize_style(style: str | None) -> str:
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_json_lines(lines: list[str], style: str = DEFAULT_STYLE) -> list[str]:
    """Syntax-highlight JSON lines while preserving the line count."""
    if not lines:
        return lines
    formatter = _formatter_for_style(normalize_style(style))
    rendered = highlight("\n".join(lines), JsonLexer(), formatter)
    colored = rendered.rstrip("\n").split("\n")
    if len(colored) != len(lines):
        return lines
    return colored


def export_lines(value: object, *, style: str | None = DEFAULT_STYLE, color: bool = True) -> list[str]:
    lines = serialize_lines(value)
    if not color:
        return lines
    return colorize_json_lines(lines, style or DEFAULT_STYLE)
