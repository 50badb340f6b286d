"""Input-layer public API for key decoding and action dispatch.

Exports are split between low-level byte decoding (`InputDecoder`,
`KeyListener`) and the registry the runtime uses to route actions.
"""

from .actions import CHAR_KEYS, ESCAPE_SEQUENCES, KeyAction
from .decoder import ESC_SEQUENCE_TIMEOUT_MS, InputDecoder, KeyListener
from .key_registry import ActionBinding, ActionRegistry

__all__ = [
    "KeyAction",
    "CHAR_KEYS",
    "ESCAPE_SEQUENCES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputDecoder",
    "KeyListener",
    "ActionBinding",
    "ActionRegistry",
]
