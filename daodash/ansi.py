"""ANSI-aware text measurement and line shaping utilities.

Provides width measurement, clipping, and padding that preserve escape sequences.
These helpers keep panels and frames aligned when color codes and wide chars are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
SGR_RESET = "\033[0m"
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def visible_length(text: str) -> int:
    """Return the display width of ``text`` ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def truncate_ansi(text: str, max_cols: int) -> str:
    """Clip ``text`` to ``max_cols`` and close any styling it opened."""
    clipped = clip_ansi_line(text, max_cols)
    if "\033" in clipped:
        return clipped + SGR_RESET
    return clipped


def pad_end_visible(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces up to ``width`` visible columns."""
    diff = width - visible_length(text)
    if diff > 0:
        return text + " " * diff
    return text


def fit_ansi_line(text: str, width: int) -> str:
    """Return ``text`` truncated or padded to exactly ``width`` visible columns."""
    if visible_length(text) > width:
        return pad_end_visible(truncate_ansi(text, width), width)
    return pad_end_visible(text, width)
