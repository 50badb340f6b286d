"""DAO overview tab: identity, assets, supply, app ids, and governance settings."""

from __future__ import annotations

import logging
from typing import Any

from ..panels import render_kv, render_panel, render_panel_grid, split_width
from ..provider import ProviderError
from ..ui_theme import UITheme
from .base import LoadResult, View, ViewContext
from .format import (
    format_amount,
    format_basis_points,
    format_duration,
    format_int,
    format_micro_algo,
    inline_bar,
    label_from_key,
)

logger = logging.getLogger(__name__)

NARROW_WIDTH = 80


class DaoView(View):
    async def load(self, context: ViewContext) -> LoadResult:
        state = await context.provider.get_global_state()
        try:
            supply: dict[str, Any] | None = await context.provider.get_supply()
        except ProviderError as exc:
            # Supply charts are optional; the rest of the overview still renders.
            logger.info("skipping supply panel: %s", exc)
            supply = None

        theme = context.theme
        width = context.width
        info = _info_pairs(state, context.network)
        assets = _asset_pairs(state)
        apps = render_kv([(label_from_key(name), app_id) for name, app_id in state.get("app_ids", {}).items()], theme)
        settings = _proposal_settings(state, theme)

        data = {"network": context.network, "state": state, "supply": supply}
        if width < NARROW_WIDTH:
            lines = [""]
            lines += render_panel(render_kv(info, theme), width, "DAO", theme=theme)
            lines += [""] + render_panel(render_kv(assets, theme), width, "Assets", theme=theme)
            if supply:
                lines += [""] + render_panel(_supply_lines(supply, width - 4, theme), width, "Token Supply", theme=theme)
            if apps:
                lines += [""] + render_panel(apps, width, "App IDs", theme=theme)
            if settings:
                lines += [""] + render_panel(settings, width, "Proposal Settings", theme=theme)
            return LoadResult(lines=lines, data=data)

        col_widths = split_width(width, 3 if supply else 2)
        top_row = [
            render_panel(render_kv(info, theme), col_widths[0], "DAO", theme=theme),
            render_panel(render_kv(assets, theme), col_widths[1], "Assets", theme=theme),
        ]
        if supply:
            top_row.append(
                render_panel(_supply_lines(supply, col_widths[2] - 4, theme), col_widths[2], "Token Supply", theme=theme)
            )

        app_width = (width - 2) * 2 // 5
        right_width = width - app_width - 2
        right_column: list[str] = []
        if settings:
            right_column += render_panel(settings, right_width, "Proposal Settings", theme=theme)
        splits = _revenue_split_lines(state, right_width - 4, theme)
        if splits:
            if right_column:
                right_column.append("")
            right_column += render_panel(splits, right_width, "Revenue Splits", theme=theme)
        if not right_column:
            right_column = render_panel(["  No proposal settings"], right_width, "Proposal Settings", theme=theme)
        bottom_row = [
            render_panel(apps or ["  No app ID data"], app_width, "App IDs", theme=theme),
            right_column,
        ]

        return LoadResult(lines=[""] + render_panel_grid([top_row, bottom_row], row_gap=1), data=data)


def _info_pairs(state: dict[str, Any], network: str) -> list[tuple[str, object]]:
    return [
        ("Network", network or "-"),
        ("App ID", state.get("app_id", "-")),
        ("Version", state.get("version", "-")),
        ("State", str(state.get("state", "-")).capitalize()),
        ("Wallet", state.get("wallet_app_id", "-")),
    ]


def _asset_pairs(state: dict[str, Any]) -> list[tuple[str, object]]:
    assets = state.get("assets", {})
    return [
        ("AKTA", assets.get("akta", "-")),
        ("BONES", assets.get("bones", "-")),
        ("Next Proposal", state.get("next_proposal_id", "-")),
        ("Action Limit", state.get("proposal_action_limit", "-")),
        ("Min Rewards", format_int(state.get("min_rewards_impact"))),
    ]


def _supply_lines(supply: dict[str, Any], bar_width: int, theme: UITheme) -> list[str]:
    lines: list[str] = []
    for symbol, info in supply.items():
        total = info.get("total") or 0
        circulating = info.get("circulating") or 0
        decimals = info.get("decimals", 0)
        fraction = circulating / total if total else 0.0
        if lines:
            lines.append("")
        lines.append(
            f"  {symbol.upper()}  {format_amount(circulating, decimals)} / {format_amount(total, decimals)}"
            f"  {theme.paint(theme.label, f'({fraction * 100:.1f}%)')}"
        )
        lines.append("  " + inline_bar(fraction, max(0, bar_width - 2), theme))
    return lines


def _proposal_settings(state: dict[str, Any], theme: UITheme) -> list[str]:
    lines: list[str] = []
    for kind, settings in state.get("proposal_settings", {}).items():
        lines.append(f"  {theme.paint(theme.section_header, label_from_key(kind))}")
        lines += render_kv(
            [
                ("Fee", format_micro_algo(settings.get("fee"))),
                ("Power", format_int(settings.get("power"))),
                ("Duration", format_duration(settings.get("duration"))),
                ("Participation", format_basis_points(settings.get("participation"))),
                ("Approval", format_basis_points(settings.get("approval"))),
            ],
            theme,
        )
    return lines


def _revenue_split_lines(state: dict[str, Any], bar_width: int, theme: UITheme) -> list[str]:
    splits = state.get("revenue_splits", [])
    if not splits:
        return []
    name_width = max(len(str(split.get("name", ""))) for split in splits)
    gauge_width = max(0, bar_width - name_width - 10)
    lines = []
    for split in splits:
        bps = split.get("bps", 0)
        lines.append(
            f"  {str(split.get('name', '')).ljust(name_width)}  "
            f"{inline_bar(bps / 10_000, gauge_width, theme)} {format_basis_points(bps)}"
        )
    return lines
