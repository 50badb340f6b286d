"""Navigation state and view identifiers for the dashboard runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

TabId = Literal["dao", "fees", "wallet", "proposals"]
DetailKind = Literal["proposal"]

TABS: tuple[TabId, ...] = ("dao", "fees", "wallet", "proposals")

TAB_LABELS: dict[TabId, str] = {
    "dao": "DAO",
    "fees": "Fees",
    "wallet": "Wallet",
    "proposals": "Proposals",
}

# Drill-down kinds reachable from each tab.
TAB_DETAILS: dict[TabId, tuple[DetailKind, ...]] = {
    "dao": (),
    "fees": (),
    "wallet": (),
    "proposals": ("proposal",),
}


def is_tab_id(value: object) -> bool:
    return isinstance(value, str) and value in TABS


@dataclass(frozen=True)
class ViewId:
    """Names a top-level tab view or one of its drill-downs."""

    tab: TabId
    detail: DetailKind | None = None
    ref: int | None = None

    @property
    def cache_key(self) -> str:
        if self.detail is None:
            return self.tab
        return f"{self.tab}/{self.detail}/{self.ref}"

    def is_reachable_from(self, tab: TabId) -> bool:
        """Return whether this id is ``tab``'s top view or one of its drill-downs."""
        if self.tab != tab:
            return False
        return self.detail is None or self.detail in TAB_DETAILS[tab]


@dataclass
class AppState:
    tab: TabId = "dao"
    scroll_offset: int = 0
    cursor: int = 0
    view_stack: list[ViewId] = field(default_factory=list)
    raw_mode: bool = False

    def current_view_id(self) -> ViewId:
        if self.view_stack:
            return self.view_stack[-1]
        return ViewId(self.tab)

    def reset_position(self) -> None:
        self.scroll_offset = 0
        self.cursor = 0


def max_scroll_offset(total_lines: int, viewport_height: int) -> int:
    """Return largest valid scroll offset for ``total_lines`` in the viewport."""
    return max(0, total_lines - max(0, viewport_height))


def clamp_scroll_offset(offset: int, total_lines: int, viewport_height: int) -> int:
    return max(0, min(offset, max_scroll_offset(total_lines, viewport_height)))
