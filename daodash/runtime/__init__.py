"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_dashboard`), the
event loop it runs, and the navigation state and cache the state machine owns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import DashboardApp


def run_dashboard(*args, **kwargs):
    """Lazily import the session entrypoint to avoid package-import cycles."""
    from .app import run_dashboard as _run_dashboard

    return _run_dashboard(*args, **kwargs)


def run_event_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_event_loop as _run_event_loop

    return _run_event_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "DashboardApp":
        from . import app as _app

        return _app.DashboardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DashboardApp",
    "run_dashboard",
    "run_event_loop",
]
