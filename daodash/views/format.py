"""Small display formatters shared by the views."""

from __future__ import annotations

from datetime import datetime, timezone

from ..ui_theme import UITheme

MICRO_ALGO = 1_000_000


def truncate_address(address: str | None, chars: int = 6) -> str:
    if not address:
        return "-"
    if len(address) <= chars * 2 + 3:
        return address
    return f"{address[:chars]}...{address[-chars:]}"


def format_int(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        return "-" if value is None else str(value)
    return f"{value:,}"


def format_micro_algo(value: object) -> str:
    if not isinstance(value, int):
        return "-"
    return f"{value / MICRO_ALGO:,.6f}".rstrip("0").rstrip(".") + " ALGO"


def format_basis_points(value: object) -> str:
    if not isinstance(value, int):
        return "-"
    return f"{value / 100:.2f}%"


def format_amount(value: object, decimals: int = 0) -> str:
    if not isinstance(value, int):
        return "-"
    if decimals <= 0:
        return f"{value:,}"
    return f"{value / 10 ** decimals:,.{min(decimals, 2)}f}"


def format_duration(seconds: object) -> str:
    if not isinstance(seconds, int) or seconds <= 0:
        return "-"
    days, rem = divmod(seconds, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes = rem // 60
    parts = [f"{days}d" if days else "", f"{hours}h" if hours else "", f"{minutes}m" if minutes else ""]
    return " ".join(part for part in parts if part) or f"{seconds}s"


def format_timestamp(ts: object) -> str:
    if not isinstance(ts, int) or ts <= 0:
        return "-"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def label_from_key(key: str) -> str:
    """``referrerPercentage`` / ``add_plugin`` -> ``Referrer Percentage`` / ``Add Plugin``."""
    spaced = "".join(f" {ch}" if ch.isupper() else ch for ch in key.replace("_", " "))
    return " ".join(word.capitalize() for word in spaced.split())


def color_status(status: str, theme: UITheme) -> str:
    styles = {
        "approved": theme.status_approved,
        "executed": theme.status_approved,
        "voting": theme.status_voting,
        "draft": theme.status_draft,
        "rejected": theme.status_rejected,
    }
    return theme.paint(styles.get(status, ""), status.capitalize())


def color_bool(value: object, theme: UITheme) -> str:
    if value:
        return theme.paint(theme.bool_true, "yes")
    return theme.paint(theme.bool_false, "no")


def inline_bar(fraction: float, width: int, theme: UITheme) -> str:
    """Horizontal gauge of ``width`` cells filled to ``fraction``."""
    width = max(0, width)
    filled = max(0, min(width, round(fraction * width)))
    return theme.paint(theme.bar_filled, "█" * filled) + theme.paint(theme.bar_empty, "░" * (width - filled))
