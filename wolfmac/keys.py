"""Translation of raw keyboard events into game key codes."""

from __future__ import annotations

from dataclasses import dataclass

CMD_KEY = 0x0100

_ARROW_KEYS = {
    0x1C: 0x08,  # left
    0x1D: 0x15,  # right
    0x1E: 0x0B,  # up
    0x1F: 0x0A,  # down
}


@dataclass(frozen=True)
class KeyPress:
    """A decoded key event."""

    key: int
    scan_code: int
    modifiers: int
    quit_requested: bool = False


def translate_key(message: int, modifiers: int) -> KeyPress:
    """Decode an event message into a key, remapping the arrow keys.

    Command-Q marks the press as a request to quit.
    """
    raw = message & 0xFF
    scan_code = (message >> 8) & 0xFF
    key = _ARROW_KEYS.get(raw, raw)
    quit_requested = key in (ord("Q"), ord("q")) and bool(modifiers & CMD_KEY)
    return KeyPress(key=key, scan_code=scan_code, modifiers=modifiers,
                    quit_requested=quit_requested)