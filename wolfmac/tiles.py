"""The word-wide tile map that records walls, doors, actors and area numbers."""

from __future__ import annotations

import enum
from typing import Iterator

MAP_SIZE = 64


class TileFlag(enum.IntFlag):
    """Bits stored in each tile; the low bits hold an area or door number."""

    NONE = 0
    NUMMASK = 0x007F
    BLOCKMOVE = 0x0080
    SWITCH = 0x0100
    PUSHWALL = 0x0200
    DOOR = 0x0400
    ACTOR = 0x0800
    GETABLE = 0x1000
    BLOCKSIGHT = 0x2000
    BODY = 0x4000
    SECRET = 0x8000


class TileMap:
    """A square grid of 16-bit tiles addressed as ``tilemap[x, y]``."""

    def __init__(self, size: int = MAP_SIZE) -> None:
        if size <= 0:
            raise ValueError("map size must be positive")
        self.size = size
        self._cells = [0] * (size * size)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError("tile coordinates out of range")
        return y * self.size + x

    def __getitem__(self, pos: tuple[int, int]) -> int:
        x, y = pos
        return self._cells[self._index(x, y)]

    def __setitem__(self, pos: tuple[int, int], value: int) -> None:
        x, y = pos
        if not 0 <= value <= 0xFFFF:
            raise ValueError("tile value must fit in 16 bits")
        self._cells[self._index(x, y)] = int(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def set_flags(self, x: int, y: int, flags: int) -> int:
        """OR ``flags`` into a tile and return the new value."""
        index = self._index(x, y)
        self._cells[index] = (self._cells[index] | int(flags)) & 0xFFFF
        return self._cells[index]

    def clear_flags(self, x: int, y: int, flags: int) -> int:
        """Remove ``flags`` from a tile and return the new value."""
        index = self._index(x, y)
        self._cells[index] &= ~int(flags) & 0xFFFF
        return self._cells[index]

    def number(self, x: int, y: int) -> int:
        """The area or door number held in a tile's low bits."""
        return self[x, y] & TileFlag.NUMMASK