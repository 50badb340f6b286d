"""Terminal control helpers for the dashboard session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
Frames are written with one ``os.write`` so the screen never shows a partial
redraw.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import shutil
import signal
import termios
import tty
from collections.abc import Callable, Sequence

ENTER_ALT_SCREEN = b"\x1b[?1049h"
LEAVE_ALT_SCREEN = b"\x1b[?1049l"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
MOVE_HOME = "\x1b[1;1H"
CLEAR_LINE = "\x1b[2K"

DEFAULT_ROWS = 24
DEFAULT_COLUMNS = 120


class TerminalController:
    """Manage terminal mode transitions and frame output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd) if os.isatty(stdin_fd) else None
        self._tui_mode = False

    @property
    def tui_mode(self) -> bool:
        return self._tui_mode

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        if self._tui_mode:
            return
        if self._saved_tty_state is not None:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            # Keep output post-processing so a bare newline also returns the carriage.
            attrs = termios.tcgetattr(self.stdin_fd)
            attrs[1] |= termios.OPOST | termios.ONLCR
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, attrs)
        os.write(self.stdout_fd, ENTER_ALT_SCREEN + HIDE_CURSOR)
        self._tui_mode = True

    def disable_tui_mode(self) -> None:
        """Restore the cursor, main screen buffer, and original tty attributes."""
        if not self._tui_mode:
            return
        os.write(self.stdout_fd, SHOW_CURSOR + LEAVE_ALT_SCREEN)
        if self._saved_tty_state is not None:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._tui_mode = False

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    def size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the terminal."""
        term = shutil.get_terminal_size((DEFAULT_COLUMNS, DEFAULT_ROWS))
        return term.lines or DEFAULT_ROWS, term.columns or DEFAULT_COLUMNS

    def write_frame(self, lines: Sequence[str]) -> None:
        """Write a whole frame: home the cursor, clear and draw each line."""
        frame = MOVE_HOME + "\n".join(CLEAR_LINE + line for line in lines)
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))

    def subscribe_resize(
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[[], None],
    ) -> Callable[[], None]:
        """Call ``callback`` on SIGWINCH; return a function that unsubscribes."""
        loop.add_signal_handler(signal.SIGWINCH, callback)

        def unsubscribe() -> None:
            loop.remove_signal_handler(signal.SIGWINCH)

        return unsubscribe
