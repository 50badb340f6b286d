"""Fees tab: fee schedules grouped into panels laid out in two columns."""

from __future__ import annotations

import re

from ..panels import render_panel, render_panel_row, split_width
from ..ui_theme import UITheme
from .base import LoadResult, View, ViewContext
from .format import format_basis_points, format_int, format_micro_algo, label_from_key

PERCENTAGE_RE = re.compile(r"Percentage|Tax", re.IGNORECASE)
FEE_RE = re.compile(r"Fee$", re.IGNORECASE)
NARROW_WIDTH = 80
COLUMNS = 2
COLUMN_GAP = 2


def format_fee_value(key: str, value: object) -> str:
    if PERCENTAGE_RE.search(key):
        return format_basis_points(value)
    if FEE_RE.search(key):
        return format_micro_algo(value)
    return format_int(value)


def _fee_content(pairs: dict[str, object], key_width: int, theme: UITheme) -> list[str]:
    return [
        f"  {theme.paint(theme.label, label_from_key(key).ljust(key_width))}  {format_fee_value(key, value)}"
        for key, value in pairs.items()
    ]


class FeesView(View):
    async def load(self, context: ViewContext) -> LoadResult:
        groups = await context.provider.get_fees()
        theme = context.theme
        width = context.width
        groups = {title: pairs for title, pairs in groups.items() if pairs}

        if not groups:
            return LoadResult(
                lines=[""] + render_panel(["  No fee data available."], width, "Fees", theme=theme),
                data={},
            )

        if width < NARROW_WIDTH:
            lines = [""]
            for index, (title, pairs) in enumerate(groups.items()):
                if index:
                    lines.append("")
                key_width = max(len(label_from_key(key)) for key in pairs)
                lines += render_panel(_fee_content(pairs, key_width, theme), width, title, theme=theme)
            return LoadResult(lines=lines, data=groups)

        col_widths = split_width(width, COLUMNS, COLUMN_GAP)
        items = list(groups.items())
        # Align keys within each column so stacked panels line up.
        key_widths = [0] * COLUMNS
        for index, (_, pairs) in enumerate(items):
            col = index % COLUMNS
            key_widths[col] = max([key_widths[col]] + [len(label_from_key(key)) for key in pairs])

        columns: list[list[str]] = [[] for _ in range(COLUMNS)]
        for index, (title, pairs) in enumerate(items):
            col = index % COLUMNS
            if columns[col]:
                columns[col].append("")
            columns[col] += render_panel(
                _fee_content(pairs, key_widths[col], theme), col_widths[col], title, theme=theme
            )

        return LoadResult(lines=[""] + render_panel_row(columns, COLUMN_GAP), data=groups)
