"""Command-line front door for daodash.

Parses CLI options, merges them over the persisted config, and builds the
data provider. Then dispatches into the interactive dashboard runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config
from .logs import configure_logging
from .provider import NETWORKS, ProviderError, SnapshotProvider
from .render.export import DEFAULT_STYLE, normalize_style
from .runtime import run_dashboard
from .runtime.state import TABS
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)


def _non_negative_float(value: str) -> float:
    """argparse type for non-negative float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daodash",
        description="Browse DAO, wallet, fee and proposal state in a full-screen terminal dashboard.",
    )
    parser.add_argument(
        "--snapshot",
        metavar="PATH",
        default=None,
        help="JSON snapshot to browse. Defaults to the bundled demo snapshot.",
    )
    parser.add_argument("--network", choices=NETWORKS, default=None, help="Network label shown in the DAO tab.")
    parser.add_argument("--tab", choices=TABS, default=None, help="Tab to open first.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}). Saved for later sessions.",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style for raw JSON (default: {DEFAULT_STYLE}).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--latency",
        type=_non_negative_float,
        default=0.0,
        help="Seconds to wait before answering each snapshot query.",
    )
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write logs here instead of the user log dir.")
    parser.add_argument("--log-level", type=str.upper, choices=config.LOG_LEVELS, default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the dashboard.

    Exits with the session's status: 0 after quit or a termination signal,
    1 after an unexpected failure or an unreadable snapshot.
    """
    args = build_parser().parse_args(argv)

    log_path = configure_logging(
        Path(args.log_file) if args.log_file else None,
        args.log_level or config.load_log_level(),
    )
    logger.info("logging to %s", log_path)

    if args.theme is not None:
        config.save_theme_name(normalize_theme_name(args.theme))
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    style = normalize_style(args.style or config.load_style_name())
    network = args.network or config.load_network()
    initial_tab = args.tab or config.load_default_tab() or "dao"

    try:
        if args.snapshot:
            provider = SnapshotProvider.from_path(Path(args.snapshot), network=network, latency=args.latency)
        else:
            provider = SnapshotProvider.demo(network=network, latency=args.latency)
    except ProviderError as exc:
        raise SystemExit(f"daodash: {exc}") from exc

    raise SystemExit(
        run_dashboard(
            provider,
            theme=theme,
            style=style,
            color=not args.no_color,
            initial_tab=initial_tab,
        )
    )


if __name__ == "__main__":
    main()
