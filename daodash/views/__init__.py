"""View lookup tables.

Every tab has exactly one top-level view and every drill-down kind exactly one
detail view; both tables are closed, so an unknown id is a programming error.
"""

from __future__ import annotations

from ..runtime.state import DetailKind, TabId, ViewId
from .base import LoadResult, View, ViewContext, ViewState, normalize_result
from .dao import DaoView
from .fees import FeesView
from .proposal_detail import ProposalDetailView
from .proposals import ProposalsView
from .wallet import WalletView

TAB_VIEWS: dict[TabId, View] = {
    "dao": DaoView(),
    "fees": FeesView(),
    "wallet": WalletView(),
    "proposals": ProposalsView(),
}

DETAIL_VIEWS: dict[DetailKind, View] = {
    "proposal": ProposalDetailView(),
}


def view_kind(view_id: ViewId) -> str:
    """Key under which a view's ``ViewState`` is kept: its tab or detail kind."""
    return view_id.detail if view_id.detail is not None else view_id.tab


def view_for(view_id: ViewId) -> View:
    if view_id.detail is not None:
        return DETAIL_VIEWS[view_id.detail]
    return TAB_VIEWS[view_id.tab]


__all__ = [
    "DETAIL_VIEWS",
    "LoadResult",
    "TAB_VIEWS",
    "View",
    "ViewContext",
    "ViewState",
    "normalize_result",
    "view_for",
    "view_kind",
]
