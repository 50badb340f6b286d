"""Proposals tab: a selectable list with the selected proposal's detail beside it."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..panels import render_columns, render_panel
from ..provider import ProviderError
from ..runtime.state import ViewId
from ..ui_theme import UITheme
from .base import LoadResult, View, ViewContext, ViewState
from .format import color_status, format_timestamp, truncate_address
from .proposal_detail import render_proposal_detail

logger = logging.getLogger(__name__)

LIST_CACHE_TTL_SECONDS = 120.0
DETAIL_CACHE_TTL_SECONDS = 60.0
NARROW_WIDTH = 80
# Blank line, panel border, and column header sit above the first row.
FIRST_ROW_LINE = 3


@dataclass
class ProposalsState(ViewState):
    clock: Callable[[], float] = time.monotonic
    entries: list[dict[str, Any]] = field(default_factory=list)
    entries_at: float | None = None
    details: dict[int, tuple[float, dict[str, Any]]] = field(default_factory=dict)
    proposal_ids: list[int] = field(default_factory=list)

    def invalidate(self) -> None:
        self.entries_at = None
        self.details.clear()

    def list_fresh(self) -> bool:
        return self.entries_at is not None and self.clock() - self.entries_at < LIST_CACHE_TTL_SECONDS

    def cached_detail(self, proposal_id: int) -> dict[str, Any] | None:
        cached = self.details.get(proposal_id)
        if cached is None or self.clock() - cached[0] >= DETAIL_CACHE_TTL_SECONDS:
            return None
        return cached[1]


class ProposalsView(View):
    selectable = True

    def new_state(self) -> ProposalsState:
        return ProposalsState()

    def selectable_count(self, view_state: ViewState, lines: list[str]) -> int:
        if isinstance(view_state, ProposalsState):
            return len(view_state.proposal_ids)
        return 0

    def selected_line(self, view_state: ViewState, cursor: int) -> int | None:
        return FIRST_ROW_LINE + cursor

    def open_selected(self, context: ViewContext) -> bool:
        state = context.view_state
        if not isinstance(state, ProposalsState) or not state.proposal_ids:
            return False
        cursor = context.cursor if context.cursor < len(state.proposal_ids) else 0
        context.navigate(ViewId("proposals", "proposal", state.proposal_ids[cursor]))
        return True

    async def load(self, context: ViewContext) -> LoadResult:
        state = context.view_state
        if not isinstance(state, ProposalsState):
            raise TypeError("proposals view needs a ProposalsState")
        theme = context.theme
        width = context.width

        if not state.list_fresh():
            state.entries = await context.provider.list_proposals()
            state.entries_at = state.clock()

        state.proposal_ids = [entry["id"] for entry in state.entries]
        state.count = len(state.proposal_ids)
        if not state.entries:
            return LoadResult(
                lines=[""] + render_panel(["  No proposals found."], width, "Proposals", theme=theme),
                data={"proposals": [], "selected": None},
            )

        cursor = context.cursor if context.cursor < len(state.proposal_ids) else 0
        selected_id = state.proposal_ids[cursor]
        detail = state.cached_detail(selected_id)
        if detail is None:
            try:
                detail = await context.provider.get_proposal(selected_id)
            except ProviderError as exc:
                logger.warning("proposal %s detail unavailable: %s", selected_id, exc)
            else:
                state.details[selected_id] = (state.clock(), detail)

        data = {"proposals": state.entries, "selected": detail}

        if width < NARROW_WIDTH:
            lines = [""] + _list_panel(state.entries, cursor, width, theme, wide=False)
            if detail is not None:
                lines += [""] + render_proposal_detail(detail, width, theme)
            return LoadResult(lines=lines, data=data)

        list_width = (width - 2) * 35 // 100
        detail_width = width - list_width - 2
        if detail is not None:
            detail_lines = render_proposal_detail(detail, detail_width, theme)
        else:
            detail_lines = render_panel(
                ["  Select a proposal with [ ] keys."], detail_width, "Proposal Detail", theme=theme
            )
        return LoadResult(
            lines=[""] + _list_panel(state.entries, cursor, list_width, theme, wide=True),
            fixed_right=[""] + detail_lines,
            data=data,
        )


def _list_panel(
    entries: list[dict[str, Any]],
    cursor: int,
    width: int,
    theme: UITheme,
    *,
    wide: bool,
) -> list[str]:
    rows = []
    for index, entry in enumerate(entries):
        marker = theme.paint(theme.cursor, "▸ ") if index == cursor else "  "
        last = str(entry.get("action_count", 0)) if wide else format_timestamp(entry.get("created"))
        rows.append(
            [
                marker + str(entry["id"]),
                color_status(str(entry.get("status", "draft")), theme),
                truncate_address(entry.get("creator")),
                last,
            ]
        )
    headers = ["  ID", "Status", "Proposer", "Actions"] if wide else ["  ID", "Status", "Creator", "Created"]
    return render_panel(render_columns(headers, rows, theme), width, f"Proposals ({len(entries)})", theme=theme)
