"""CLI argument, config merge, and provider selection tests.

Verifies how ``daodash.cli.main`` turns arguments and persisted config into
``run_dashboard`` keyword arguments and exit statuses.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from daodash import cli
from daodash.provider import SnapshotProvider
from daodash.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.config_path = self.tmp / "config.json"
        for patcher in (
            mock.patch("daodash.config.CONFIG_PATH", self.config_path),
            mock.patch("daodash.cli.configure_logging", return_value=None),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)

    def _run(self, *argv: str, status: int = 0) -> mock.MagicMock:
        with mock.patch("daodash.cli.run_dashboard", return_value=status) as run_dashboard:
            with self.assertRaises(SystemExit) as raised:
                cli.main(list(argv))
        self.assertEqual(raised.exception.code, status)
        return run_dashboard

    def test_defaults_use_demo_snapshot(self) -> None:
        run_dashboard = self._run()

        run_dashboard.assert_called_once()
        (provider,) = run_dashboard.call_args.args
        self.assertIsInstance(provider, SnapshotProvider)
        self.assertEqual(provider.network, "testnet")
        self.assertEqual(
            run_dashboard.call_args.kwargs,
            {"theme": DEFAULT_THEME, "style": "monokai", "color": True, "initial_tab": "dao"},
        )

    def test_options_override_config(self) -> None:
        self.config_path.write_text(
            json.dumps({"default_tab": "fees", "network": "mainnet", "style": "friendly"}),
            encoding="utf-8",
        )
        run_dashboard = self._run("--tab", "wallet", "--network", "localnet")

        (provider,) = run_dashboard.call_args.args
        self.assertEqual(provider.network, "localnet")
        self.assertEqual(run_dashboard.call_args.kwargs["initial_tab"], "wallet")
        self.assertEqual(run_dashboard.call_args.kwargs["style"], "friendly")

    def test_config_supplies_defaults(self) -> None:
        self.config_path.write_text(json.dumps({"default_tab": "proposals", "network": "Mainnet"}), encoding="utf-8")
        run_dashboard = self._run()

        (provider,) = run_dashboard.call_args.args
        self.assertEqual(provider.network, "mainnet")
        self.assertEqual(run_dashboard.call_args.kwargs["initial_tab"], "proposals")

    def test_theme_option_is_persisted(self) -> None:
        run_dashboard = self._run("--theme", "Ocean")

        self.assertEqual(run_dashboard.call_args.kwargs["theme"], OCEAN_THEME)
        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["theme"], "ocean")

    def test_no_color_uses_plain_theme(self) -> None:
        run_dashboard = self._run("--no-color", "--theme", "ocean")

        self.assertEqual(run_dashboard.call_args.kwargs["theme"], PLAIN_THEME)
        self.assertFalse(run_dashboard.call_args.kwargs["color"])

    def test_snapshot_path_and_latency(self) -> None:
        snapshot = self.tmp / "snapshot.json"
        snapshot.write_text(json.dumps({"network": "mainnet", "dao": {}}), encoding="utf-8")
        run_dashboard = self._run("--snapshot", str(snapshot), "--latency", "0.25")

        (provider,) = run_dashboard.call_args.args
        self.assertEqual(provider.network, "mainnet")
        self.assertEqual(provider.latency, 0.25)

    def test_unreadable_snapshot_exits_with_message(self) -> None:
        with mock.patch("daodash.cli.run_dashboard") as run_dashboard:
            with self.assertRaises(SystemExit) as raised:
                cli.main(["--snapshot", str(self.tmp / "missing.json")])

        self.assertIn("cannot read snapshot", str(raised.exception.code))
        run_dashboard.assert_not_called()

    def test_session_status_becomes_exit_code(self) -> None:
        self._run(status=1)

    def test_invalid_arguments_are_rejected(self) -> None:
        for argv in (["--latency", "-1"], ["--tab", "history"], ["--log-level", "loud"]):
            with mock.patch("sys.stderr"), self.assertRaises(SystemExit) as raised:
                cli.main(argv)
            self.assertEqual(raised.exception.code, 2)

    def test_log_options_reach_logging_setup(self) -> None:
        log_file = self.tmp / "session.log"
        with mock.patch("daodash.cli.configure_logging") as configure_logging:
            self._run("--log-file", str(log_file), "--log-level", "debug")
        configure_logging.assert_called_once_with(log_file, "DEBUG")


if __name__ == "__main__":
    unittest.main()
