"""Palette handling: colour tables and fades between palettes."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

PALETTE_SIZE = 768
FADE_STEPS = 16
_WHITE_ENTRY = (0xFFFF, 0xFFFF, 0xFFFF)
_BLACK_ENTRY = (0x0000, 0x0000, 0x0000)
_MIN_BLUE = 0x0101

ColorEntry = tuple[int, int, int]


def _check(palette: bytes) -> bytes:
    data = bytes(palette)
    if len(data) != PALETTE_SIZE:
        raise ValueError("a palette holds exactly 768 bytes")
    return data


def black_palette() -> bytes:
    """A palette with entry 0 white and every other entry black."""
    return bytes([255, 255, 255]) + bytes(PALETTE_SIZE - 3)


def build_color_table(palette: bytes) -> list[ColorEntry]:
    """Expand an 8-bit RGB palette into 16-bit colour table entries.

    Entries 0 and 255 stay fixed white and black; a zero blue component
    is raised slightly so no entry becomes pure black.
    """
    data = _check(palette)
    table = [_WHITE_ENTRY]
    for index in range(1, 255):
        red, green, blue = data[index * 3:index * 3 + 3]
        table.append(((red << 8) | red, (green << 8) | green,
                      ((blue << 8) | blue) or _MIN_BLUE))
    table.append(_BLACK_ENTRY)
    return table


def _fade_component(source: int, target: int, step: int) -> int:
    scaled = (target - source) * step
    part = abs(scaled) // FADE_STEPS
    return source + (part if scaled >= 0 else -part)


class PaletteManager:
    """Holds the current palette and hands colour tables to a display sink."""

    def __init__(self, sink: Optional[Callable[[list[ColorEntry]], None]] = None) -> None:
        self.sink = sink
        self.current = bytes(PALETTE_SIZE)

    def apply(self, palette: bytes) -> list[ColorEntry]:
        """Make ``palette`` current and return its colour table."""
        data = _check(palette)
        table = build_color_table(data)
        self.current = data
        if self.sink is not None:
            self.sink(table)
        return table

    def fade_steps(self, target: bytes) -> Iterator[bytes]:
        """Fade towards ``target`` in sixteen steps, applying and yielding each.

        Nothing is yielded when the target is already current. The caller
        waits one tick between steps.
        """
        goal = _check(target)
        if goal == self.current:
            return
        source = self.current
        for step in range(1, FADE_STEPS + 1):
            work = bytes(_fade_component(s, t, step) for s, t in zip(source, goal))
            self.apply(work)
            yield work