"""View contract shared by every tab and drill-down.

A view turns provider data into screen lines. Views are stateless strategy
objects: anything they need to remember between loads (a selected account,
an auxiliary data cache) lives in a ``ViewState`` the runtime owns and hands
back through the ``ViewContext``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..ui_theme import DEFAULT_THEME, UITheme

if TYPE_CHECKING:
    from ..provider import DataProvider
    from ..runtime.state import ViewId


@dataclass
class LoadResult:
    lines: list[str]
    fixed_right: list[str] | None = None
    data: Any = None


@dataclass
class ViewState:
    """Per-view state owned by the runtime and passed to every load."""

    selected: int = 0
    count: int = 0
    selected_line: int = 0

    def invalidate(self) -> None:
        """Drop auxiliary data cached by the view."""


@dataclass
class ViewContext:
    width: int
    height: int
    provider: DataProvider
    navigate: Callable[[ViewId], None]
    refresh: Callable[[], None]
    view_state: ViewState = field(default_factory=ViewState)
    view_id: ViewId | None = None
    cursor: int = 0
    network: str = ""
    theme: UITheme = DEFAULT_THEME


class View:
    """Base class for views; subclasses implement ``load``.

    Optional capabilities default to "not supported":

    * ``cycle`` moves a view-held selection (wallet accounts) and returns True.
    * ``selectable``/``selectable_count`` bound cursor movement for list views.
    * ``selected_line`` names the content line of the current selection so
      the runtime can scroll it into view after a reload.
    * ``open_selected`` drills into the current selection.
    """

    selectable = False

    def new_state(self) -> ViewState:
        return ViewState()

    async def load(self, context: ViewContext) -> list[str] | LoadResult:
        raise NotImplementedError

    def selectable_count(self, view_state: ViewState, lines: list[str]) -> int:
        return view_state.count

    def cycle(self, view_state: ViewState, step: int) -> bool:
        return False

    def selected_line(self, view_state: ViewState, cursor: int) -> int | None:
        return None

    def open_selected(self, context: ViewContext) -> bool:
        return False


def normalize_result(result: list[str] | LoadResult) -> LoadResult:
    """Accept either a bare line list or a ``LoadResult``."""
    if isinstance(result, LoadResult):
        return result
    return LoadResult(lines=list(result))
