"""Proposal detail rendering, shared by the proposals tab and its drill-down."""

from __future__ import annotations

from typing import Any

from ..panels import render_kv, render_panel, render_panel_row, split_width
from ..ui_theme import UITheme
from .base import LoadResult, View, ViewContext
from .format import (
    color_status,
    format_int,
    format_micro_algo,
    format_timestamp,
    inline_bar,
    label_from_key,
    truncate_address,
)

SIDE_BY_SIDE_WIDTH = 60

ADD_ACTIONS = frozenset({"add_plugin", "add_named_plugin", "add_allowances", "new_escrow"})
REMOVE_ACTIONS = frozenset({"remove_plugin", "remove_named_plugin", "remove_allowances", "remove_execute_plugin"})


def format_cid(cid: object) -> str:
    if not isinstance(cid, str) or not cid:
        return "-"
    if len(cid) <= 20:
        return cid
    return f"{cid[:10]}...{cid[-6:]}"


def color_action_label(action_type: str, theme: UITheme) -> str:
    label = label_from_key(action_type)
    if action_type in ADD_ACTIONS:
        return theme.paint(theme.status_approved, label)
    if action_type in REMOVE_ACTIONS:
        return theme.paint(theme.status_rejected, label)
    return theme.paint(theme.status_voting, label)


def _vote_lines(votes: dict[str, int], width: int, theme: UITheme) -> list[str]:
    approvals = votes.get("approvals", 0)
    rejections = votes.get("rejections", 0)
    abstains = votes.get("abstains", 0)
    lines = render_kv(
        [
            ("Approvals", format_int(approvals)),
            ("Rejections", format_int(rejections)),
            ("Abstains", format_int(abstains)),
        ],
        theme,
    )
    cast = approvals + rejections
    if cast:
        lines.append("")
        lines.append("  " + inline_bar(approvals / cast, max(0, width - 8), theme))
    return lines


def _action_field(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return format_int(value)
    if isinstance(value, str) and len(value) == 58:
        return truncate_address(value)
    return str(value)


def render_action_panel(action: dict[str, Any], index: int, width: int, theme: UITheme) -> list[str]:
    fields = action.get("fields", {})
    content = [f"  {color_action_label(str(action.get('type', 'unknown')), theme)}"]
    if fields:
        content += render_kv([(label_from_key(key), _action_field(value)) for key, value in fields.items()], theme)
    return render_panel(content, width, f"Action {index + 1}", theme=theme)


def render_proposal_detail(proposal: dict[str, Any], width: int, theme: UITheme) -> list[str]:
    """Render meta, votes, and one panel per action as stacked lines."""
    proposal_id = proposal.get("id", "?")
    meta = render_kv(
        [
            ("Status", color_status(str(proposal.get("status", "draft")), theme)),
            ("Creator", truncate_address(proposal.get("creator"))),
            ("CID", format_cid(proposal.get("cid"))),
            ("Created", format_timestamp(proposal.get("created"))),
            ("Voting", format_timestamp(proposal.get("voting_ts"))),
            ("Fees Paid", format_micro_algo(proposal.get("fees_paid"))),
        ],
        theme,
    )

    lines: list[str] = []
    if width >= SIDE_BY_SIDE_WIDTH:
        left_width, right_width = split_width(width, 2)
        lines += render_panel_row(
            [
                render_panel(meta, left_width, f"Proposal #{proposal_id}", theme=theme),
                render_panel(_vote_lines(proposal.get("votes", {}), right_width - 4, theme), right_width, "Votes", theme=theme),
            ]
        )
    else:
        lines += render_panel(meta, width, f"Proposal #{proposal_id}", theme=theme)
        lines.append("")
        lines += render_panel(_vote_lines(proposal.get("votes", {}), width - 4, theme), width, "Votes", theme=theme)

    for index, action in enumerate(proposal.get("actions", [])):
        lines.append("")
        lines += render_action_panel(action, index, width, theme)
    return lines


class ProposalDetailView(View):
    """Full-width drill-down for a single proposal, reached with Enter."""

    async def load(self, context: ViewContext) -> LoadResult:
        view_id = context.view_id
        if view_id is None or view_id.ref is None:
            raise ValueError("proposal detail needs a proposal id")
        proposal = await context.provider.get_proposal(view_id.ref)
        lines = [""] + render_proposal_detail(proposal, context.width, context.theme)
        return LoadResult(lines=lines, data=proposal)
