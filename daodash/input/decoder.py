"""Raw terminal input decoding.

Translates byte chunks read from stdin into semantic key actions. A lone ESC
byte is ambiguous with the start of a multi-byte sequence, so the decoder keeps
a tiny state machine (idle -> pending escape -> resolved) driven by an explicit
clock rather than sleeping.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .actions import CHAR_KEYS, ESC, ESCAPE_SEQUENCES, KeyAction

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 50

IDLE = "idle"
PENDING_ESCAPE = "pending_escape"


class InputDecoder:
    """Clock-driven decoder for raw key chunks.

    ``feed`` returns the actions a chunk resolves immediately. When the chunk is
    a lone ESC the decoder enters ``pending_escape`` and exposes ``deadline``;
    ``expire`` (or ``resolve_timeout`` once a timer fires) turns it into a
    single ``back`` action.
    """

    def __init__(self, escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.escape_timeout = escape_timeout_ms / 1000.0
        self.state = IDLE
        self.deadline: float | None = None

    def feed(self, chunk: bytes, now: float) -> list[KeyAction]:
        seq = chunk.decode("utf-8", errors="replace")
        if not seq:
            return []

        actions: list[KeyAction] = []
        if self.state == PENDING_ESCAPE:
            self._reset()
            continued = ESCAPE_SEQUENCES.get(ESC + seq)
            if continued is not None:
                return [continued]
            # Not a continuation, so the earlier ESC was a real keypress.
            actions.append("back")

        if seq.startswith(ESC):
            mapped = ESCAPE_SEQUENCES.get(seq)
            if mapped is not None:
                actions.append(mapped)
            elif seq == ESC:
                self.state = PENDING_ESCAPE
                self.deadline = now + self.escape_timeout
            else:
                logger.debug("ignoring unknown escape sequence %r", seq)
            return actions

        action = CHAR_KEYS.get(seq)
        if action is not None:
            actions.append(action)
        return actions

    def expire(self, now: float) -> list[KeyAction]:
        """Resolve a pending ESC as ``back`` once ``now`` reaches the deadline."""
        if self.state != PENDING_ESCAPE or self.deadline is None or now < self.deadline:
            return []
        return self.resolve_timeout()

    def resolve_timeout(self) -> list[KeyAction]:
        if self.state != PENDING_ESCAPE:
            return []
        self._reset()
        return ["back"]

    @property
    def pending(self) -> bool:
        return self.state == PENDING_ESCAPE

    def _reset(self) -> None:
        self.state = IDLE
        self.deadline = None


class KeyListener:
    """Bind an ``InputDecoder`` to an event loop's timer facility.

    Chunks are fed by the run loop's stdin reader; the escape timeout is armed
    with ``loop.call_later`` and cancelled as soon as more input arrives.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        dispatch: Callable[[KeyAction], None],
        decoder: InputDecoder | None = None,
    ) -> None:
        self._loop = loop
        self._dispatch = dispatch
        self.decoder = decoder if decoder is not None else InputDecoder()
        self._timer: asyncio.TimerHandle | None = None

    def feed(self, chunk: bytes) -> None:
        self._cancel_timer()
        for action in self.decoder.feed(chunk, self._loop.time()):
            self._dispatch(action)
        if self.decoder.pending and self.decoder.deadline is not None:
            delay = max(0.0, self.decoder.deadline - self._loop.time())
            self._timer = self._loop.call_later(delay, self._on_timeout)

    def close(self) -> None:
        self._cancel_timer()

    def _on_timeout(self) -> None:
        self._timer = None
        for action in self.decoder.resolve_timeout():
            self._dispatch(action)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
