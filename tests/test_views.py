"""View rendering tests over the bundled demo snapshot.

Each view is loaded directly with a hand-built context so layout, fallback
panels, and per-view state can be checked without the runtime.
"""

from __future__ import annotations

import unittest

from daodash.ansi import visible_length
from daodash.provider import ProviderError, SnapshotProvider
from daodash.runtime.state import ViewId
from daodash.ui_theme import PLAIN_THEME
from daodash.views import DETAIL_VIEWS, TAB_VIEWS, ViewContext, view_for, view_kind
from daodash.views.fees import FeesView, format_fee_value
from daodash.views.proposal_detail import ProposalDetailView, format_cid, render_proposal_detail
from daodash.views.proposals import FIRST_ROW_LINE, ProposalsState, ProposalsView
from daodash.views.wallet import WalletState, WalletView


def _context(provider, width=120, view_state=None, **kwargs) -> ViewContext:
    navigated: list[ViewId] = []
    context = ViewContext(
        width=width,
        height=30,
        provider=provider,
        navigate=navigated.append,
        refresh=lambda: None,
        network=provider.network,
        theme=PLAIN_THEME,
        **kwargs,
    )
    if view_state is not None:
        context.view_state = view_state
    context.navigated = navigated
    return context


def _demo() -> SnapshotProvider:
    return SnapshotProvider.demo()


class _CountingProvider(SnapshotProvider):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[str] = []

    async def list_proposals(self):
        self.calls.append("list")
        return await super().list_proposals()

    async def get_proposal(self, proposal_id):
        self.calls.append(f"detail {proposal_id}")
        return await super().get_proposal(proposal_id)


class _NoDetailProvider(SnapshotProvider):
    async def get_proposal(self, proposal_id):
        raise ProviderError(f"proposal {proposal_id} not found")


class ViewLookupTests(unittest.TestCase):
    def test_every_tab_has_a_view(self) -> None:
        for tab in ("dao", "fees", "wallet", "proposals"):
            self.assertIs(view_for(ViewId(tab)), TAB_VIEWS[tab])
        self.assertIsInstance(view_for(ViewId("fees")), FeesView)

    def test_detail_ids_resolve_to_detail_views(self) -> None:
        view_id = ViewId("proposals", "proposal", 1)
        self.assertIs(view_for(view_id), DETAIL_VIEWS["proposal"])
        self.assertEqual(view_kind(view_id), "proposal")
        self.assertEqual(view_kind(ViewId("wallet")), "wallet")

    def test_unknown_view_raises(self) -> None:
        with self.assertRaises(KeyError):
            view_for(ViewId("nope"))


class DaoViewTests(unittest.IsolatedAsyncioTestCase):
    async def test_wide_layout_shows_all_panels_within_width(self) -> None:
        result = await TAB_VIEWS["dao"].load(_context(_demo(), width=120))
        text = "\n".join(result.lines)

        self.assertEqual(result.lines[0], "")
        for title in ("DAO", "Assets", "Token Supply", "App IDs", "Proposal Settings", "Revenue Splits"):
            self.assertIn(title, text)
        self.assertIn("Upgrade App", text)
        self.assertIn("731427001", text)
        self.assertIn("40.00%", text)
        for line in result.lines:
            self.assertLessEqual(visible_length(line), 120)
        self.assertEqual(result.data["network"], "testnet")
        self.assertIsNone(result.fixed_right)

    async def test_narrow_layout_stacks_panels(self) -> None:
        result = await TAB_VIEWS["dao"].load(_context(_demo(), width=60))
        text = "\n".join(result.lines)

        self.assertIn("Token Supply", text)
        self.assertLess(text.index("Assets"), text.index("Token Supply"))
        for line in result.lines:
            self.assertLessEqual(visible_length(line), 60)

    async def test_missing_supply_skips_supply_panel(self) -> None:
        document = _demo()._document
        del document["supply"]
        provider = SnapshotProvider(document)

        with self.assertLogs("daodash.views.dao", level="INFO"):
            result = await TAB_VIEWS["dao"].load(_context(provider, width=120))

        self.assertNotIn("Token Supply", "\n".join(result.lines))
        self.assertIsNone(result.data["supply"])

    async def test_missing_global_state_propagates(self) -> None:
        with self.assertRaises(ProviderError):
            await TAB_VIEWS["dao"].load(_context(SnapshotProvider({}), width=120))


class FeesViewTests(unittest.IsolatedAsyncioTestCase):
    def test_fee_values_are_formatted_by_key(self) -> None:
        self.assertEqual(format_fee_value("referrerPercentage", 500), "5.00%")
        self.assertEqual(format_fee_value("impactTaxMax", 2500), "25.00%")
        self.assertEqual(format_fee_value("createFee", 100_000), "0.1 ALGO")
        self.assertEqual(format_fee_value("maxPlugins", 1500), "1,500")
        self.assertEqual(format_fee_value("postFee", None), "-")

    async def test_wide_layout_pairs_groups_in_two_columns(self) -> None:
        result = await TAB_VIEWS["fees"].load(_context(_demo(), width=120))

        self.assertIn("Wallet Fees", result.lines[1])
        self.assertIn("Social Fees", result.lines[1])
        self.assertIn("Referrer Percentage", "\n".join(result.lines))
        for line in result.lines:
            self.assertLessEqual(visible_length(line), 120)
        self.assertEqual(set(result.data), {
            "Wallet Fees", "Social Fees", "Staking Fees", "Subscription Fees", "NFT Fees", "Swap Fees",
        })

    async def test_narrow_layout_stacks_groups(self) -> None:
        result = await TAB_VIEWS["fees"].load(_context(_demo(), width=50))
        titles = [line for line in result.lines if line.startswith("┌")]
        self.assertEqual(len(titles), 6)
        self.assertIn("Wallet Fees", titles[0])
        self.assertIn("Social Fees", titles[1])

    async def test_empty_fees_show_placeholder(self) -> None:
        result = await TAB_VIEWS["fees"].load(_context(SnapshotProvider({"fees": {"Empty": {}}}), width=100))
        self.assertIn("No fee data available.", "\n".join(result.lines))
        self.assertEqual(result.data, {})


class ProposalsViewTests(unittest.IsolatedAsyncioTestCase):
    async def test_wide_layout_lists_and_shows_selected_detail(self) -> None:
        view = ProposalsView()
        state = view.new_state()
        result = await view.load(_context(_demo(), view_state=state))

        self.assertIn("Proposals (4)", result.lines[1])
        self.assertIn("▸ 4", result.lines[FIRST_ROW_LINE])
        self.assertNotIn("▸", result.lines[FIRST_ROW_LINE + 1])
        self.assertIsNotNone(result.fixed_right)
        self.assertIn("Proposal #4", "\n".join(result.fixed_right))
        self.assertIn("Add Plugin", "\n".join(result.fixed_right))
        self.assertEqual(state.proposal_ids, [4, 3, 2, 1])
        self.assertEqual(view.selectable_count(state, result.lines), 4)
        self.assertEqual(view.selected_line(state, 2), FIRST_ROW_LINE + 2)

    async def test_cursor_selects_row_and_detail(self) -> None:
        view = ProposalsView()
        result = await view.load(_context(_demo(), view_state=view.new_state(), cursor=2))

        self.assertIn("▸ 2", result.lines[FIRST_ROW_LINE + 2])
        self.assertIn("Proposal #2", "\n".join(result.fixed_right))
        self.assertEqual(result.data["selected"]["id"], 2)

    async def test_out_of_range_cursor_falls_back_to_first_row(self) -> None:
        view = ProposalsView()
        result = await view.load(_context(_demo(), view_state=view.new_state(), cursor=9))
        self.assertIn("▸ 4", result.lines[FIRST_ROW_LINE])

    async def test_narrow_layout_puts_detail_below_list(self) -> None:
        view = ProposalsView()
        result = await view.load(_context(_demo(), width=70, view_state=view.new_state()))
        text = "\n".join(result.lines)

        self.assertIsNone(result.fixed_right)
        self.assertIn("CREATED", text)
        self.assertLess(text.index("Proposals (4)"), text.index("Proposal #4"))
        for line in result.lines:
            self.assertLessEqual(visible_length(line), 70)

    async def test_list_and_details_are_cached_until_invalidated(self) -> None:
        now = [0.0]
        provider = _CountingProvider(_demo()._document)
        view = ProposalsView()
        state = ProposalsState(clock=lambda: now[0])

        await view.load(_context(provider, view_state=state))
        now[0] = 59.0
        await view.load(_context(provider, view_state=state))
        self.assertEqual(provider.calls, ["list", "detail 4"])

        now[0] = 60.0
        await view.load(_context(provider, view_state=state))
        self.assertEqual(provider.calls, ["list", "detail 4", "detail 4"])

        state.invalidate()
        await view.load(_context(provider, view_state=state))
        self.assertEqual(provider.calls[-2:], ["list", "detail 4"])

    async def test_list_expires_after_two_minutes(self) -> None:
        now = [0.0]
        provider = _CountingProvider(_demo()._document)
        view = ProposalsView()
        state = ProposalsState(clock=lambda: now[0])

        await view.load(_context(provider, view_state=state))
        now[0] = 120.0
        await view.load(_context(provider, view_state=state))
        self.assertEqual(provider.calls.count("list"), 2)

    async def test_detail_failure_keeps_list(self) -> None:
        view = ProposalsView()
        with self.assertLogs("daodash.views.proposals", level="WARNING"):
            result = await view.load(_context(_NoDetailProvider(_demo()._document), view_state=view.new_state()))

        self.assertIn("Proposals (4)", result.lines[1])
        self.assertIn("Select a proposal with [ ] keys.", "\n".join(result.fixed_right))
        self.assertIsNone(result.data["selected"])

    async def test_empty_list_shows_placeholder(self) -> None:
        view = ProposalsView()
        state = view.new_state()
        result = await view.load(_context(SnapshotProvider({"proposals": []}), view_state=state))

        self.assertIn("No proposals found.", "\n".join(result.lines))
        self.assertEqual(state.count, 0)
        self.assertIsNone(result.fixed_right)

    async def test_open_selected_navigates_to_cursor_row(self) -> None:
        view = ProposalsView()
        state = view.new_state()
        await view.load(_context(_demo(), view_state=state))

        context = _context(_demo(), view_state=state, cursor=1)
        self.assertTrue(view.open_selected(context))
        self.assertEqual(context.navigated, [ViewId("proposals", "proposal", 3)])

    async def test_open_selected_without_rows_does_nothing(self) -> None:
        view = ProposalsView()
        context = _context(_demo(), view_state=view.new_state())
        self.assertFalse(view.open_selected(context))
        self.assertEqual(context.navigated, [])


class ProposalDetailTests(unittest.IsolatedAsyncioTestCase):
    def test_format_cid(self) -> None:
        self.assertEqual(format_cid(""), "-")
        self.assertEqual(format_cid(None), "-")
        self.assertEqual(format_cid("bafkshort"), "bafkshort")
        self.assertEqual(
            format_cid("bafkreigh2akiscaildcqabsyg3dfr6chu3fgpregiymsck7e7aqa4s52zy"),
            "bafkreigh2...4s52zy",
        )

    async def test_detail_view_renders_one_panel_per_action(self) -> None:
        view = ProposalDetailView()
        result = await view.load(_context(_demo(), view_id=ViewId("proposals", "proposal", 3)))
        text = "\n".join(result.lines)

        self.assertEqual(result.lines[0], "")
        self.assertIn("Proposal #3", result.lines[1])
        self.assertIn("Votes", result.lines[1])
        self.assertIn("Action 1", text)
        self.assertIn("Update Fields", text)
        self.assertIn("Action 2", text)
        self.assertIn("Toggle Escrow Lock", text)
        self.assertEqual(result.data["id"], 3)

    async def test_detail_view_requires_proposal_id(self) -> None:
        with self.assertRaises(ValueError):
            await ProposalDetailView().load(_context(_demo(), view_id=ViewId("proposals", "proposal")))

    async def test_unknown_proposal_propagates_provider_error(self) -> None:
        with self.assertRaises(ProviderError):
            await ProposalDetailView().load(_context(_demo(), view_id=ViewId("proposals", "proposal", 99)))

    async def test_narrow_detail_stacks_meta_and_votes(self) -> None:
        proposal = await _demo().get_proposal(1)
        lines = render_proposal_detail(proposal, 50, PLAIN_THEME)

        self.assertIn("Proposal #1", lines[0])
        self.assertNotIn("Votes", lines[0])
        self.assertTrue(any("Votes" in line for line in lines[1:]))
        self.assertFalse(any("Action 1" in line for line in lines))
        for line in lines:
            self.assertLessEqual(visible_length(line), 50)


class WalletViewTests(unittest.IsolatedAsyncioTestCase):
    async def test_wide_layout_marks_selected_account(self) -> None:
        view = WalletView()
        state = view.new_state()
        result = await view.load(_context(_demo(), view_state=state))

        self.assertEqual(state.count, 3)
        self.assertIn("▸ Main Wallet", result.lines[state.selected_line])
        self.assertIn("Accounts (3)", "\n".join(result.lines))
        right = "\n".join(result.fixed_right)
        self.assertIn("Rev Settlement (731428001)", right)
        self.assertIn("Balances", right)
        self.assertEqual(result.data["selected_account"]["name"], "Main Wallet")

    async def test_selected_escrow_detail(self) -> None:
        view = WalletView()
        state = view.new_state()
        state.selected = 2
        result = await view.load(_context(_demo(), view_state=state))

        self.assertIn("▸ treasury locked", result.lines[state.selected_line])
        right = "\n".join(result.fixed_right)
        self.assertIn("No plugins for this account.", right)
        self.assertIn("Allowances", right)
        self.assertIn("amount: 5.00", right)

    async def test_narrow_layout_puts_account_detail_below(self) -> None:
        view = WalletView()
        state = view.new_state()
        result = await view.load(_context(_demo(), width=70, view_state=state))
        text = "\n".join(result.lines)

        self.assertIsNone(result.fixed_right)
        self.assertIn("▸ Main Wallet", result.lines[state.selected_line])
        self.assertLess(text.index("Accounts (3)"), text.index("Rev Settlement"))
        for line in result.lines:
            self.assertLessEqual(visible_length(line), 70)

    async def test_out_of_range_selection_resets(self) -> None:
        view = WalletView()
        state = view.new_state()
        state.selected = 7
        await view.load(_context(_demo(), view_state=state))
        self.assertEqual(state.selected, 0)

    async def test_wallet_data_is_cached_for_thirty_seconds(self) -> None:
        now = [0.0]
        provider = SnapshotProvider.demo()
        view = WalletView()
        state = WalletState(clock=lambda: now[0])

        await view.load(_context(provider, view_state=state))
        fetched = state.wallet
        now[0] = 29.0
        await view.load(_context(provider, view_state=state))
        self.assertIs(state.wallet, fetched)

        now[0] = 30.0
        await view.load(_context(provider, view_state=state))
        self.assertIsNot(state.wallet, fetched)

    def test_cycle_wraps_and_ignores_single_account(self) -> None:
        view = WalletView()
        state = WalletState(count=3)
        self.assertTrue(view.cycle(state, 1))
        self.assertEqual(state.selected, 1)
        view.cycle(state, -1)
        view.cycle(state, -1)
        self.assertEqual(state.selected, 2)

        single = WalletState(count=1)
        self.assertTrue(view.cycle(single, 1))
        self.assertEqual(single.selected, 0)


if __name__ == "__main__":
    unittest.main()
