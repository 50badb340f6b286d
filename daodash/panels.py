"""Box-drawing panel layout primitives.

Pure functions: box content in borders, lay panels side by side, stack panel
rows into a grid, and split a total width into column widths. Width math is
always done on visible columns so styled content stays aligned.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import fit_ansi_line, pad_end_visible, visible_length
from .ui_theme import DEFAULT_THEME, UITheme


def render_panel(
    content: Sequence[str],
    width: int,
    title: str | None = None,
    padding: int = 1,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Wrap content lines in box-drawing borders.

    ::

        ┌─ Title ─────┐
        │ content     │
        └─────────────┘

    Panels narrower than four columns cannot hold a border and are returned as
    plain content.
    """
    if width < 4:
        return list(content)

    inner_width = width - 2
    padding = max(0, min(padding, inner_width // 2))
    pad = " " * padding
    content_width = inner_width - padding * 2

    if title:
        title_text = fit_ansi_line(f" {title} ", min(visible_length(title) + 2, inner_width - 1))
        rule_after = inner_width - 1 - visible_length(title_text)
        top = (
            theme.paint(theme.border, "┌─")
            + theme.paint(theme.panel_title, title_text)
            + theme.paint(theme.border, "─" * max(0, rule_after) + "┐")
        )
    else:
        top = theme.paint(theme.border, "┌" + "─" * inner_width + "┐")
    bottom = theme.paint(theme.border, "└" + "─" * inner_width + "┘")

    border = theme.paint(theme.border, "│")
    lines = [top]
    for line in content:
        lines.append(f"{border}{pad}{fit_ansi_line(line, content_width)}{pad}{border}")
    lines.append(bottom)
    return lines


def render_panel_row(panels: Sequence[Sequence[str]], gap: int = 2) -> list[str]:
    """Place rendered panels side by side, padding shorter panels to the tallest."""
    if not panels:
        return []
    if len(panels) == 1:
        return list(panels[0])

    max_height = max(len(panel) for panel in panels)
    gap_str = " " * gap
    # Each panel's own first line defines its column width.
    widths = [visible_length(panel[0]) if panel else 0 for panel in panels]

    lines: list[str] = []
    for row in range(max_height):
        parts: list[str] = []
        for panel, panel_width in zip(panels, widths):
            if row < len(panel):
                parts.append(pad_end_visible(panel[row], panel_width))
            else:
                parts.append(" " * panel_width)
        lines.append(gap_str.join(parts))
    return lines


def render_panel_grid(
    rows: Sequence[Sequence[Sequence[str]]],
    row_gap: int = 0,
    col_gap: int = 2,
) -> list[str]:
    """Stack panel rows vertically with ``row_gap`` blank lines between them."""
    lines: list[str] = []
    for index, row in enumerate(rows):
        if index > 0:
            lines.extend([""] * max(0, row_gap))
        lines.extend(render_panel_row(row, col_gap))
    return lines


def split_width(total_width: int, count: int, gap: int = 2) -> list[int]:
    """Divide ``total_width`` among ``count`` columns separated by ``gap``.

    Widths sum to ``total_width - gap * (count - 1)``; whatever integer
    division leaves over goes one column at a time to the leftmost columns.
    """
    if count <= 0:
        return []
    if count == 1:
        return [total_width]

    available = total_width - gap * (count - 1)
    base, remainder = divmod(available, count)
    return [base + (1 if index < remainder else 0) for index in range(count)]


def render_kv(pairs: Sequence[tuple[str, object]], theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Render aligned ``key  value`` rows with dimmed keys."""
    if not pairs:
        return []
    key_width = max(len(key) for key, _ in pairs)
    return [f"  {theme.paint(theme.label, key.ljust(key_width))}  {value}" for key, value in pairs]


def render_columns(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    theme: UITheme = DEFAULT_THEME,
    gap: int = 3,
) -> list[str]:
    """Render a borderless table with upper-cased dim headers."""
    if not rows:
        return []

    col_widths = []
    for index, header in enumerate(headers):
        data_max = max((visible_length(row[index]) for row in rows if index < len(row)), default=0)
        col_widths.append(max(len(header), data_max))

    sep = " " * gap
    header_cells = [
        pad_end_visible(theme.paint(theme.label, header.upper()), col_widths[index])
        for index, header in enumerate(headers)
    ]
    lines = [f"  {sep.join(header_cells)}"]
    for row in rows:
        cells = [
            cell if index == len(row) - 1 else pad_end_visible(cell, col_widths[index])
            for index, cell in enumerate(row)
        ]
        lines.append(f"  {sep.join(cells)}")
    return lines
