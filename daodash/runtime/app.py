"""Dashboard state machine and session bootstrap.

``DashboardApp`` owns navigation state, the rendered-content cache, and the
load generation counter. Key actions mutate state and either re-render (scroll)
or schedule a view load as an asyncio task. Loads that finish after the user
has moved on are discarded by comparing generations.

``run_dashboard`` wires the app to a real terminal and reports fatal errors.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time
import traceback
from collections.abc import Callable

from ..input import ActionBinding, ActionRegistry, KeyAction
from ..provider import DataProvider
from ..render import render_frame, total_line_count, viewport_height
from ..render.export import DEFAULT_STYLE, export_lines
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from ..views import View, ViewContext, ViewState, normalize_result, view_for, view_kind
from .cache import CACHE_TTL_SECONDS, ViewCache
from .state import TABS, AppState, TabId, ViewId, clamp_scroll_offset, max_scroll_offset

logger = logging.getLogger(__name__)

PAGE_STEP = 10


def error_lines(exc: BaseException) -> list[str]:
    message = str(exc) or type(exc).__name__
    return ["", f"  Error: {message}", "", "  Press 'r' to retry."]


class DashboardApp:
    """Navigation, loading, and scrolling for the tabbed dashboard.

    ``terminal`` only needs ``size()`` and ``write_frame(lines)``. ``on_quit``
    is called for the quit action and ``on_fatal`` with any exception raised
    outside a view load; the run loop uses both to end the session.
    """

    def __init__(
        self,
        provider: DataProvider,
        terminal,
        *,
        theme: UITheme = DEFAULT_THEME,
        style: str = DEFAULT_STYLE,
        color: bool = True,
        initial_tab: TabId = "dao",
        clock: Callable[[], float] = time.monotonic,
        cache_ttl: float = CACHE_TTL_SECONDS,
        on_quit: Callable[[], None] | None = None,
        on_fatal: Callable[[BaseException], None] | None = None,
    ) -> None:
        self.provider = provider
        self.terminal = terminal
        self.theme = theme
        self.style = style
        self.color = color
        self.state = AppState(tab=initial_tab)
        self.cache = ViewCache(cache_ttl, clock)
        self.generation = 0
        self.loading = False
        self.content_lines: list[str] = []
        self.fixed_right: list[str] | None = None
        self.pending_scroll: Callable[[], int | None] | None = None
        self.view_states: dict[str, ViewState] = {}
        self.tasks: set[asyncio.Task] = set()
        self.on_quit = on_quit
        self.on_fatal = on_fatal
        self.keys = ActionRegistry().register_bindings(
            ActionBinding(("quit",), self.quit),
            ActionBinding(("tab-next",), lambda: self.switch_tab(1)),
            ActionBinding(("tab-prev",), lambda: self.switch_tab(-1)),
            ActionBinding(("sub-next",), lambda: self.cycle_selection(1)),
            ActionBinding(("sub-prev",), lambda: self.cycle_selection(-1)),
            ActionBinding(("up",), lambda: self.scroll_by(-1)),
            ActionBinding(("down",), lambda: self.scroll_by(1)),
            ActionBinding(("page-up",), lambda: self.scroll_by(-PAGE_STEP)),
            ActionBinding(("page-down",), lambda: self.scroll_by(PAGE_STEP)),
            ActionBinding(("top",), self.scroll_to_top),
            ActionBinding(("bottom",), self.scroll_to_bottom),
            ActionBinding(("enter",), self.open_selection),
            ActionBinding(("back",), self.back),
            ActionBinding(("refresh",), self.refresh),
            ActionBinding(("json",), self.toggle_raw_mode),
        )

    # Geometry

    def viewport_rows(self) -> int:
        rows, _cols = self.terminal.size()
        return viewport_height(rows)

    def total_lines(self) -> int:
        return total_line_count(self.content_lines, self.fixed_right)

    def clamp_scroll(self) -> None:
        self.state.scroll_offset = clamp_scroll_offset(
            self.state.scroll_offset, self.total_lines(), self.viewport_rows()
        )

    def ensure_line_visible(self, line: int) -> None:
        view_rows = self.viewport_rows()
        if line < self.state.scroll_offset:
            self.state.scroll_offset = line
        elif line >= self.state.scroll_offset + view_rows:
            self.state.scroll_offset = line - view_rows + 1

    # Views

    def view_state_for(self, view_id: ViewId, view: View | None = None) -> ViewState:
        kind = view_kind(view_id)
        view_state = self.view_states.get(kind)
        if view_state is None:
            view_state = (view or view_for(view_id)).new_state()
            self.view_states[kind] = view_state
        return view_state

    def make_context(self, view_id: ViewId, view_state: ViewState) -> ViewContext:
        rows, cols = self.terminal.size()
        return ViewContext(
            width=cols,
            height=viewport_height(rows),
            provider=self.provider,
            navigate=self.navigate,
            refresh=self.refresh,
            view_state=view_state,
            view_id=view_id,
            cursor=self.state.cursor,
            network=self.provider.network,
            theme=self.theme,
        )

    # Render cycle

    def render(self) -> None:
        rows, cols = self.terminal.size()
        frame = render_frame(
            self.state,
            self.content_lines,
            rows,
            cols,
            self.loading,
            self.fixed_right,
            self.theme,
        )
        self.terminal.write_frame(frame)

    async def load_and_render(self, force_refresh: bool = False) -> None:
        view_id = self.state.current_view_id()
        key = view_id.cache_key

        if not force_refresh and not self.state.raw_mode:
            cached = self.cache.get(key)
            if cached is not None:
                # Cached content supersedes any load still in flight.
                self.generation += 1
                self.loading = False
                self.content_lines = cached.lines
                self.fixed_right = cached.fixed_right
                logger.debug("serving %s from cache", key)
                self._finish_load()
                return

        self.generation += 1
        generation = self.generation
        self.loading = True
        # The viewport may have grown since the last frame.
        self.clamp_scroll()
        self.render()

        view = view_for(view_id)
        view_state = self.view_state_for(view_id, view)
        logger.debug("loading %s (generation %d)", key, generation)
        try:
            result = normalize_result(await view.load(self.make_context(view_id, view_state)))
        except Exception as exc:
            if generation != self.generation:
                logger.debug("discarding stale failure for %s (generation %d)", key, generation)
                return
            logger.warning("load of %s failed: %s", key, exc, exc_info=True)
            self.content_lines = error_lines(exc)
            self.fixed_right = None
        else:
            if generation != self.generation:
                logger.debug("discarding stale result for %s (generation %d)", key, generation)
                return
            lines = result.lines
            fixed_right = result.fixed_right or None
            if self.state.raw_mode:
                payload = result.data if result.data is not None else lines
                lines = export_lines(payload, style=self.style, color=self.color)
                fixed_right = None
            else:
                self.cache.put(key, lines, fixed_right)
            self.content_lines = lines
            self.fixed_right = fixed_right

        self.loading = False
        self._finish_load()

    def _finish_load(self) -> None:
        if self.pending_scroll is not None:
            line = self.pending_scroll()
            self.pending_scroll = None
            if line is not None:
                self.ensure_line_visible(line)
        self.clamp_scroll()
        self.render()

    def schedule_load(self, force_refresh: bool = False) -> asyncio.Task:
        task = asyncio.create_task(self.load_and_render(force_refresh))
        self.tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self.tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.fail(exc)

    async def wait_idle(self) -> None:
        """Wait until every scheduled load, including ones they schedule, is done."""
        while self.tasks:
            await asyncio.gather(*list(self.tasks), return_exceptions=True)

    def fail(self, exc: BaseException) -> None:
        logger.error("fatal dashboard error", exc_info=exc)
        if self.on_fatal is None:
            raise exc
        self.on_fatal(exc)

    # Actions

    def handle_action(self, action: KeyAction) -> bool:
        return self.keys.dispatch(action)

    def quit(self) -> None:
        logger.info("quit requested")
        if self.on_quit is not None:
            self.on_quit()

    def reset_position(self) -> None:
        self.state.reset_position()
        self.pending_scroll = None
        view_id = self.state.current_view_id()
        # A cached list still marks the row of the old cursor.
        if view_for(view_id).selectable:
            self.cache.invalidate(view_id.cache_key)

    def navigate(self, view_id: ViewId) -> None:
        if view_id.detail is None or not view_id.is_reachable_from(self.state.tab):
            raise ValueError(f"{view_id.cache_key} is not a drill-down of the {self.state.tab} tab")
        self.state.view_stack.append(view_id)
        self.reset_position()
        self.schedule_load()

    def back(self) -> None:
        if not self.state.view_stack:
            return
        self.state.view_stack.pop()
        self.reset_position()
        self.schedule_load()

    def switch_tab(self, step: int) -> None:
        self.state.view_stack.clear()
        index = TABS.index(self.state.tab)
        self.state.tab = TABS[(index + step) % len(TABS)]
        self.reset_position()
        self.schedule_load()

    def cycle_selection(self, step: int) -> None:
        view_id = self.state.current_view_id()
        view = view_for(view_id)
        view_state = self.view_state_for(view_id, view)

        if view.cycle(view_state, step):
            pass
        elif view.selectable:
            count = view.selectable_count(view_state, self.content_lines)
            if count <= 0:
                return
            self.state.cursor = (self.state.cursor + step) % count
        else:
            self.switch_tab(step)
            return

        self.cache.invalidate(view_id.cache_key)
        self.pending_scroll = lambda: view.selected_line(view_state, self.state.cursor)
        self.schedule_load()

    def open_selection(self) -> None:
        view_id = self.state.current_view_id()
        view = view_for(view_id)
        view.open_selected(self.make_context(view_id, self.view_state_for(view_id, view)))

    def refresh(self) -> None:
        view_id = self.state.current_view_id()
        self.cache.invalidate(view_id.cache_key)
        self.view_state_for(view_id).invalidate()
        self.schedule_load(force_refresh=True)

    def toggle_raw_mode(self) -> None:
        self.state.raw_mode = not self.state.raw_mode
        self.state.scroll_offset = 0
        self.pending_scroll = None
        self.schedule_load()

    def scroll_by(self, delta: int) -> None:
        offset = clamp_scroll_offset(self.state.scroll_offset + delta, self.total_lines(), self.viewport_rows())
        if offset != self.state.scroll_offset:
            self.state.scroll_offset = offset
            self.render()

    def scroll_to_top(self) -> None:
        self.state.scroll_offset = 0
        self.render()

    def scroll_to_bottom(self) -> None:
        self.state.scroll_offset = max_scroll_offset(self.total_lines(), self.viewport_rows())
        self.render()

    def handle_resize(self) -> None:
        # Rendered lines depend on width.
        self.cache.clear()
        self.schedule_load()

    # Lifecycle

    def start(self) -> asyncio.Task:
        return self.schedule_load()

    def shutdown(self) -> None:
        for task in list(self.tasks):
            task.cancel()


def run_dashboard(
    provider: DataProvider,
    *,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
    color: bool = True,
    initial_tab: TabId = "dao",
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> int:
    """Run an interactive session; return the process exit status."""
    from .loop import run_event_loop

    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    if not os.isatty(stdin_fd):
        print("daodash: stdin is not a terminal", file=sys.stderr)
        return 1

    terminal = TerminalController(stdin_fd, stdout_fd)
    app = DashboardApp(
        provider,
        terminal,
        theme=theme,
        style=style,
        color=color,
        initial_tab=initial_tab,
    )
    try:
        with terminal.raw_mode():
            asyncio.run(run_event_loop(app, terminal, stdin_fd))
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 0
    except Exception as exc:
        terminal.disable_tui_mode()
        logger.critical("dashboard crashed", exc_info=exc)
        print("daodash: uncaught exception:", file=sys.stderr)
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        return 1
    return 0
