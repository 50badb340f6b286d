"""Wallet tab: wallet info and accounts on the left, the selected account on the right.

``[`` and ``]`` cycle the selected account. The selection lives in the
``WalletState`` the runtime keeps for this view, so it survives tab switches.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..panels import render_columns, render_kv, render_panel, split_width
from ..ui_theme import UITheme
from .base import LoadResult, View, ViewContext, ViewState
from .format import (
    color_bool,
    format_amount,
    format_duration,
    format_micro_algo,
    truncate_address,
)

logger = logging.getLogger(__name__)

DATA_CACHE_TTL_SECONDS = 30.0
NARROW_WIDTH = 80
ASSET_DECIMALS = {"algo": 6, "akta": 6, "bones": 6, "usdc": 6}


@dataclass
class WalletState(ViewState):
    clock: Callable[[], float] = time.monotonic
    wallet: dict[str, Any] | None = None
    fetched_at: float | None = None

    def invalidate(self) -> None:
        self.wallet = None
        self.fetched_at = None

    def fresh(self) -> bool:
        return (
            self.wallet is not None
            and self.fetched_at is not None
            and self.clock() - self.fetched_at < DATA_CACHE_TTL_SECONDS
        )


class WalletView(View):
    def new_state(self) -> WalletState:
        return WalletState()

    def cycle(self, view_state: ViewState, step: int) -> bool:
        if view_state.count > 1:
            view_state.selected = (view_state.selected + step) % view_state.count
        return True

    def selected_line(self, view_state: ViewState, cursor: int) -> int | None:
        return view_state.selected_line

    async def load(self, context: ViewContext) -> LoadResult:
        state = context.view_state
        if not isinstance(state, WalletState):
            raise TypeError("wallet view needs a WalletState")
        if not state.fresh():
            state.wallet = await context.provider.get_wallet()
            state.fetched_at = state.clock()
            logger.debug("wallet data refreshed")

        wallet = state.wallet or {}
        accounts = wallet.get("accounts", [])
        state.count = len(accounts)
        if state.selected >= state.count:
            state.selected = 0

        theme = context.theme
        width = context.width
        data = {
            "info": wallet.get("info", {}),
            "accounts": [{key: acct.get(key) for key in ("name", "app_id", "address", "locked", "balances")} for acct in accounts],
            "selected_account": accounts[state.selected] if accounts else None,
        }

        if width < NARROW_WIDTH:
            lines = [""] + _left_column(wallet, state, width, theme, lead=1)
            if accounts:
                lines += [""] + _account_detail(accounts[state.selected], width, theme)
            return LoadResult(lines=lines, data=data)

        left_width, right_width = split_width(width, 2)
        left = _left_column(wallet, state, left_width, theme, lead=1)
        right = _account_detail(accounts[state.selected], right_width, theme) if accounts else []
        return LoadResult(lines=[""] + left, fixed_right=[""] + right if right else None, data=data)


def _left_column(wallet: dict[str, Any], state: WalletState, width: int, theme: UITheme, *, lead: int) -> list[str]:
    """Render wallet info and the account list; record the selected row's line.

    ``lead`` is the number of lines the caller places above the result.
    """
    info = wallet.get("info", {})
    pairs: list[tuple[str, object]] = [
        ("Version", info.get("version") or "-"),
        ("Admin", truncate_address(info.get("admin"))),
        ("Domain", info.get("domain") or "-"),
        ("Nickname", info.get("nickname") or "-"),
        ("DAO", info.get("dao") or "-"),
        ("Factory", info.get("factory") or "-"),
    ]
    if info.get("referrer"):
        pairs.append(("Referrer", truncate_address(info["referrer"])))

    lines = render_panel(render_kv(pairs, theme), width, "Wallet Info", theme=theme)
    lines.append("")
    # +1 for the panel's top border.
    accounts_start = lead + len(lines) + 1

    accounts = wallet.get("accounts", [])
    content: list[str] = []
    for index, account in enumerate(accounts):
        if index == 1:
            # Escrows are listed apart from the main wallet.
            content.append("")
        selected = index == state.selected
        if selected:
            state.selected_line = accounts_start + len(content)
        marker = theme.paint(theme.cursor, "▸ ") if selected else "  "
        name = theme.paint(theme.selected, account.get("name", "?")) if selected else account.get("name", "?")
        lock = ""
        if index > 0:
            lock = " " + theme.paint(theme.bool_false if account.get("locked") else theme.bool_true,
                                     "locked" if account.get("locked") else "unlocked")
        address = theme.paint(theme.label, truncate_address(account.get("address"), 4))
        content.append(f"{marker}{name}{lock}  {address}")
        content.append(f"    {theme.paint(theme.label, _account_summary(account))}")

    if not accounts:
        content.append("  No accounts.")
    lines += render_panel(content, width, f"Accounts ({len(accounts)})", theme=theme)
    return lines


def _account_summary(account: dict[str, Any]) -> str:
    balances = account.get("balances", {})
    parts = []
    if balances.get("algo"):
        parts.append(format_micro_algo(balances["algo"]))
    for symbol in ("usdc", "akta", "bones"):
        if balances.get(symbol):
            parts.append(f"{format_amount(balances[symbol], ASSET_DECIMALS[symbol])} {symbol.upper()}")
    plugin_count = len(account.get("plugins", []))
    parts.append(f"{plugin_count} plugin{'s' if plugin_count != 1 else ''}")
    return " · ".join(parts)


def _account_detail(account: dict[str, Any], width: int, theme: UITheme) -> list[str]:
    lines = render_panel(
        render_kv([("App ID", account.get("app_id", "-")), ("Address", account.get("address", "-"))], theme),
        width,
        account.get("name", "Account"),
        theme=theme,
    )

    balances = account.get("balances", {})
    if balances:
        lines.append("")
        lines += render_panel(
            render_kv(
                [
                    (symbol.upper(), format_amount(amount, ASSET_DECIMALS.get(symbol, 0)))
                    for symbol, amount in balances.items()
                ],
                theme,
            ),
            width,
            "Balances",
            theme=theme,
        )

    plugins = account.get("plugins", [])
    lines.append("")
    if not plugins:
        lines += render_panel(["  No plugins for this account."], width, "Plugins", theme=theme)
    for index, plugin in enumerate(plugins):
        if index:
            lines.append("")
        caller = plugin.get("caller") or "global"
        pairs: list[tuple[str, object]] = [
            ("Caller", "Global" if caller == "global" else truncate_address(caller)),
            ("Admin", color_bool(plugin.get("admin"), theme)),
            ("Delegation", str(plugin.get("delegation", "-")).capitalize()),
        ]
        if plugin.get("cooldown"):
            pairs.append(("Cooldown", format_duration(plugin["cooldown"])))
        content = render_kv(pairs, theme)
        if plugin.get("methods"):
            content.append("  " + theme.paint(theme.label, "Methods: ") + ", ".join(plugin["methods"]))
        lines += render_panel(content, width, f"{plugin.get('name', 'Plugin')} ({plugin.get('app_id', '?')})", theme=theme)

    allowances = account.get("allowances", [])
    if allowances:
        rows = [[str(item.get("asset", "?")).upper(), str(item.get("type", "?")), _allowance_details(item)] for item in allowances]
        lines.append("")
        lines += render_panel(render_columns(["Asset", "Type", "Details"], rows, theme), width, "Allowances", theme=theme)
    return lines


def _allowance_details(allowance: dict[str, Any]) -> str:
    decimals = ASSET_DECIMALS.get(str(allowance.get("asset")), 0)
    parts = [
        f"amount: {format_amount(allowance.get('amount'), decimals)}",
        f"spent: {format_amount(allowance.get('spent'), decimals)}",
    ]
    if allowance.get("interval"):
        parts.append(f"interval: {format_duration(allowance['interval'])}")
    return ", ".join(parts)
