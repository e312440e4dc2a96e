"""Sliding doors and the area connectivity they control."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from .tiles import TileFlag, TileMap

TILE_GLOBAL = 256
FRAC_BITS = 8
DEFAULT_DOOR_SPEED = 6
DEFAULT_OPEN_TICS = 20
DEFAULT_PLAYER_SIZE = 0x58
BLOCKED_RETRY_TICS = 60

LOCKED_DOOR_SOUND = "locked_door"
OPEN_DOOR_SOUND = "open_door"


class DoorAction(enum.Enum):
    """What a door is doing."""

    OPEN = enum.auto()
    OPENING = enum.auto()
    CLOSING = enum.auto()
    CLOSED = enum.auto()
    WEDGED_OPEN = enum.auto()


@dataclass
class Door:
    """A door in the map; ``position`` runs from 0 (shut) to TILE_GLOBAL - 1."""

    tile_x: int
    tile_y: int
    area1: int
    area2: int
    info: int = 0
    action: DoorAction = DoorAction.CLOSED
    position: int = 0
    ticcount: int = 0

    @property
    def lock(self) -> int:
        """0 for an unlocked door, 1 or 2 for the key it needs."""
        return self.info >> 1


class AreaLinks:
    """Connections between areas; duplicate pairs are allowed and counted."""

    def __init__(self, pairs: Iterable[tuple[int, int]] = ()) -> None:
        self.pairs: list[tuple[int, int]] = list(pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def add(self, area1: int, area2: int) -> None:
        """Record one connection between two areas."""
        self.pairs.append((area1, area2))

    def remove(self, area1: int, area2: int) -> None:
        """Drop one matching connection, if there is one."""
        try:
            self.pairs.remove((area1, area2))
        except ValueError:
            pass

    def reachable_from(self, area: int) -> set[int]:
        """Every area connected to ``area``, including itself."""
        seen = {area}
        pending = [area]
        while pending:
            current = pending.pop()
            for first, second in self.pairs:
                if first == current:
                    other = second
                elif second == current:
                    other = first
                else:
                    continue
                if other not in seen:
                    seen.add(other)
                    pending.append(other)
        return seen


class DoorSystem:
    """Runs the doors of one level against its tile map and the player."""

    def __init__(self, tilemap: TileMap, doors: Optional[Iterable[Door]] = None,
                 area_sound: Optional[Sequence[int]] = None, *,
                 door_speed: int = DEFAULT_DOOR_SPEED,
                 open_tics: int = DEFAULT_OPEN_TICS,
                 player_size: int = DEFAULT_PLAYER_SIZE,
                 on_sound: Optional[Callable[[str], None]] = None) -> None:
        self.tilemap = tilemap
        self.doors: list[Door] = list(doors or ())
        self.area_sound = area_sound
        self.door_speed = door_speed
        self.open_tics = open_tics
        self.player_size = player_size
        self.on_sound = on_sound
        self.links = AreaLinks()
        self.area_by_player: set[int] = set()
        self.player_x = 0
        self.player_y = 0
        self.player_area = 0

    def _sound_area(self, area: int) -> int:
        return area if self.area_sound is None else self.area_sound[area]

    def _play(self, sound: str) -> None:
        if self.on_sound is not None:
            self.on_sound(sound)

    def connect_areas(self) -> set[int]:
        """Recompute which areas connect with the player's area."""
        self.area_by_player = self.links.reachable_from(self._sound_area(self.player_area))
        return self.area_by_player

    def open_door(self, door: Door) -> None:
        """Start a door opening, or keep an open door open longer."""
        if door.action is DoorAction.OPEN:
            door.ticcount = 0
        else:
            door.action = DoorAction.OPENING

    def close_door(self, door: Door) -> None:
        """Start a door closing unless something stands in the doorway."""
        x, y = door.tile_x, door.tile_y
        if door.action is not DoorAction.OPENING:
            tile = self.tilemap[x, y]
            if tile & TileFlag.BODY:
                door.action = DoorAction.WEDGED_OPEN
                return
            if tile & (TileFlag.ACTOR | TileFlag.GETABLE):
                door.ticcount = BLOCKED_RETRY_TICS
                return
            reach = 0x82 + self.player_size
            if (abs(self.player_x - ((x << FRAC_BITS) | 0x80)) <= reach
                    and abs(self.player_y - ((y << FRAC_BITS) | 0x80)) <= reach):
                return
        door.action = DoorAction.CLOSING
        self.tilemap.set_flags(x, y, TileFlag.BLOCKMOVE | TileFlag.BLOCKSIGHT)

    def operate_door(self, index: int, keys: int) -> None:
        """Toggle a door as the player uses it, checking the keys held."""
        door = self.doors[index]
        if (door.lock == 1 and not keys & 1) or (door.lock == 2 and not keys & 2):
            self._play(LOCKED_DOOR_SOUND)
            return
        if door.action in (DoorAction.CLOSED, DoorAction.CLOSING):
            self.open_door(door)
        elif door.action in (DoorAction.OPEN, DoorAction.OPENING):
            self.close_door(door)

    def _door_open(self, door: Door, tics: int) -> None:
        door.ticcount += tics
        if door.ticcount >= self.open_tics:
            door.ticcount = self.open_tics - 1
            self.close_door(door)

    def _door_opening(self, door: Door, tics: int) -> None:
        position = door.position
        if not position:
            area1 = self._sound_area(door.area1)
            area2 = self._sound_area(door.area2)
            self.links.add(area1, area2)
            self.connect_areas()
            if area1 in self.area_by_player or area2 in self.area_by_player:
                self._play(OPEN_DOOR_SOUND)
        position += self.door_speed * tics
        if position >= TILE_GLOBAL - 1:
            position = TILE_GLOBAL - 1
            door.ticcount = 0
            door.action = DoorAction.OPEN
            self.tilemap.clear_flags(door.tile_x, door.tile_y,
                                     TileFlag.BLOCKMOVE | TileFlag.BLOCKSIGHT)
        door.position = position

    def _door_closing(self, door: Door, tics: int) -> None:
        position = door.position - self.door_speed * tics
        if position <= 0:
            self.links.remove(self._sound_area(door.area1), self._sound_area(door.area2))
            self.connect_areas()
            door.action = DoorAction.CLOSED
            position = 0
        door.position = position

    def move_doors(self, tics: int) -> None:
        """Advance every door by ``tics`` game tics."""
        for door in self.doors:
            if door.action is DoorAction.OPEN:
                self._door_open(door, tics)
            elif door.action is DoorAction.OPENING:
                self._door_opening(door, tics)
            elif door.action is DoorAction.CLOSING:
                self._door_closing(door, tics)