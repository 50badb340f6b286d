"""Semantic key actions and the raw-input tables that produce them."""

from __future__ import annotations

from typing import Literal

KeyAction = Literal[
    "quit",
    "tab-next",
    "tab-prev",
    "sub-next",
    "sub-prev",
    "up",
    "down",
    "page-up",
    "page-down",
    "top",
    "bottom",
    "enter",
    "back",
    "refresh",
    "json",
]

ESC = "\x1b"

ESCAPE_SEQUENCES: dict[str, KeyAction] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[5~": "page-up",
    "\x1b[6~": "page-down",
    "\x1b[Z": "tab-prev",
    "\x1b[H": "top",
    "\x1b[F": "bottom",
}

CHAR_KEYS: dict[str, KeyAction] = {
    "\x03": "quit",
    "q": "quit",
    "\t": "tab-next",
    "[": "sub-prev",
    "]": "sub-next",
    "k": "up",
    "j": "json",
    "g": "top",
    "G": "bottom",
    "\r": "enter",
    "\x7f": "back",
    "r": "refresh",
}
