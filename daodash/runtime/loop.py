"""Asyncio event loop wiring for an interactive session.

Registers stdin, SIGWINCH, SIGINT and SIGTERM with the running loop and waits
for the session to end. The session ends normally on quit or a termination
signal, and abnormally when anything outside a view load raises; in that case
the exception is re-raised to the caller after the terminal is restored.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal

from ..input import KeyAction, KeyListener
from .app import DashboardApp

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 64
STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def run_event_loop(app: DashboardApp, terminal, stdin_fd: int) -> None:
    loop = asyncio.get_running_loop()
    done: asyncio.Future[None] = loop.create_future()

    def finish(exc: BaseException | None = None) -> None:
        if done.done():
            return
        if exc is None:
            done.set_result(None)
        else:
            done.set_exception(exc)

    def dispatch(action: KeyAction) -> None:
        try:
            app.handle_action(action)
        except Exception as exc:
            finish(exc)

    listener = KeyListener(loop, dispatch)

    def on_readable() -> None:
        try:
            chunk = os.read(stdin_fd, READ_CHUNK_BYTES)
        except OSError as exc:
            finish(exc)
            return
        if not chunk:
            logger.info("stdin closed")
            finish()
            return
        listener.feed(chunk)

    def on_loop_error(_loop: asyncio.AbstractEventLoop, context: dict) -> None:
        exc = context.get("exception")
        finish(exc if exc is not None else RuntimeError(context.get("message", "event loop error")))

    app.on_quit = finish
    app.on_fatal = finish
    previous_handler = loop.get_exception_handler()
    loop.set_exception_handler(on_loop_error)
    loop.add_reader(stdin_fd, on_readable)
    unsubscribe_resize = terminal.subscribe_resize(loop, app.handle_resize)
    for signum in STOP_SIGNALS:
        loop.add_signal_handler(signum, finish)

    try:
        app.start()
        await done
    finally:
        listener.close()
        loop.remove_reader(stdin_fd)
        unsubscribe_resize()
        for signum in STOP_SIGNALS:
            loop.remove_signal_handler(signum)
        loop.set_exception_handler(previous_handler)
        # Restore the screen first, then drop loads that are still running.
        terminal.disable_tui_mode()
        app.shutdown()
        await app.wait_idle()
