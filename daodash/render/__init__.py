"""Frame compositor for the tabbed dashboard.

Maps navigation state, view content, and terminal size to the exact list of
lines the terminal shows: tab bar, rule, scrollable viewport, status bar.
Nothing here mutates state or touches the terminal.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import fit_ansi_line, truncate_ansi, visible_length
from ..runtime.state import TAB_LABELS, TABS, AppState, TabId
from ..ui_theme import DEFAULT_THEME, UITheme

APP_LABEL = " DAO Dashboard"
CHROME_ROWS = 3
BASE_HINTS: tuple[str, ...] = ("q:quit", "Tab:nav", "↑↓:scroll", "r:refresh", "j:json")
TAB_HINTS: dict[TabId, tuple[str, ...]] = {
    "wallet": ("[]:acct",),
    "proposals": ("[]:select", "Enter:open"),
}


def viewport_height(rows: int) -> int:
    """Rows left for content once tab bar, rule, and status bar are drawn."""
    return max(0, rows - CHROME_ROWS)


def total_line_count(content_lines: Sequence[str], fixed_right: Sequence[str] | None = None) -> int:
    if fixed_right:
        return max(len(content_lines), len(fixed_right))
    return len(content_lines)


def render_tab_bar(active_tab: TabId, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    prefix = theme.paint(theme.app_name, APP_LABEL) + "   "
    tabs = theme.paint(theme.tab_separator, "│").join(
        theme.paint(theme.active_tab if tab == active_tab else theme.inactive_tab, f" {TAB_LABELS[tab]} ")
        for tab in TABS
    )
    return fit_ansi_line(prefix + tabs, width)


def render_separator(width: int, theme: UITheme = DEFAULT_THEME) -> str:
    return theme.paint(theme.separator, "─" * max(0, width))


def status_hints(state: AppState) -> list[str]:
    """Return the key legend, with tab-specific bindings after ``Tab:nav``."""
    hints = list(BASE_HINTS)
    hints[2:2] = TAB_HINTS.get(state.tab, ())
    if state.view_stack:
        hints.append("Esc:back")
    return hints


def progress_indicator(scroll_offset: int, total_lines: int, view_rows: int, loading: bool) -> str:
    if loading:
        return "loading... "
    if total_lines <= view_rows:
        return f"{total_lines} ln "
    # Integer round-half-up of the share of content seen so far.
    pct = (200 * (scroll_offset + view_rows) + total_lines) // (2 * total_lines)
    return f"{min(pct, 100)}% ({total_lines} ln) "


def build_status_line(left_text: str, right_text: str, width: int) -> str:
    """Join left and right halves, filling the gap (at least one space)."""
    middle = width - visible_length(left_text) - visible_length(right_text)
    pad = " " * middle if middle > 0 else " "
    return f"{left_text}{pad}{right_text}"


def render_status_bar(
    state: AppState,
    total_lines: int,
    view_rows: int,
    width: int,
    loading: bool,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    left = " " + "  ".join(status_hints(state))
    right = progress_indicator(state.scroll_offset, total_lines, view_rows, loading)
    line = build_status_line(left, right, width)
    if visible_length(line) > width:
        line = truncate_ansi(line, width)
    return theme.paint(theme.status_bar, line)


def render_viewport(
    content_lines: Sequence[str],
    scroll_offset: int,
    view_rows: int,
    width: int,
    fixed_right: Sequence[str] | None = None,
) -> list[str]:
    """Slice ``view_rows`` rows of content starting at ``scroll_offset``.

    With a non-empty ``fixed_right`` stream the viewport is split: the right
    column is as wide as the widest right line, the left column takes the rest
    minus one separating space, and both streams share the same offset.
    """
    rows: list[str] = []
    if fixed_right:
        right_width = max(visible_length(line) for line in fixed_right)
        left_width = max(0, width - right_width - 1)
        for idx in range(scroll_offset, scroll_offset + view_rows):
            left = content_lines[idx] if idx < len(content_lines) else ""
            right = fixed_right[idx] if idx < len(fixed_right) else ""
            row = f"{fit_ansi_line(left, left_width)} {right}"
            rows.append(truncate_ansi(row, width) if visible_length(row) > width else row)
        return rows

    for idx in range(scroll_offset, scroll_offset + view_rows):
        if idx >= len(content_lines):
            rows.append("")
            continue
        line = content_lines[idx]
        rows.append(truncate_ansi(line, width) if visible_length(line) > width else line)
    return rows


def render_frame(
    state: AppState,
    content_lines: Sequence[str],
    term_rows: int,
    term_cols: int,
    loading: bool,
    fixed_right: Sequence[str] | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Compose a full frame of exactly ``term_rows`` lines."""
    view_rows = viewport_height(term_rows)
    lines = [
        render_tab_bar(state.tab, term_cols, theme),
        render_separator(term_cols, theme),
    ]
    lines.extend(render_viewport(content_lines, state.scroll_offset, view_rows, term_cols, fixed_right))
    lines.append(
        render_status_bar(
            state,
            total_line_count(content_lines, fixed_right),
            view_rows,
            term_cols,
            loading,
            theme,
        )
    )
    return lines[: max(0, term_rows)]


__all__ = [
    "APP_LABEL",
    "build_status_line",
    "progress_indicator",
    "render_frame",
    "render_separator",
    "render_status_bar",
    "render_tab_bar",
    "render_viewport",
    "status_hints",
    "total_line_count",
    "viewport_height",
]
