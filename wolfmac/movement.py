"""Enemy movement: choosing directions and stepping actors across the tile map."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import Callable, Optional

from .doors import FRAC_BITS, TILE_GLOBAL, DoorSystem
from .tiles import TileFlag, TileMap

DEFAULT_MIN_ACTOR_DIST = TILE_GLOBAL


class Direction(enum.IntEnum):
    """The eight compass directions plus "not moving"."""

    EAST = 0
    NORTHEAST = 1
    NORTH = 2
    NORTHWEST = 3
    WEST = 4
    SOUTHWEST = 5
    SOUTH = 6
    SOUTHEAST = 7
    NODIR = 8


_OPPOSITE = {
    Direction.EAST: Direction.WEST,
    Direction.NORTHEAST: Direction.SOUTHWEST,
    Direction.NORTH: Direction.SOUTH,
    Direction.NORTHWEST: Direction.SOUTHEAST,
    Direction.WEST: Direction.EAST,
    Direction.SOUTHWEST: Direction.NORTHEAST,
    Direction.SOUTH: Direction.NORTH,
    Direction.SOUTHEAST: Direction.NORTHWEST,
    Direction.NODIR: Direction.NODIR,
}

_DIAGONAL = {
    (Direction.EAST, Direction.NORTH): Direction.NORTHEAST,
    (Direction.EAST, Direction.SOUTH): Direction.SOUTHEAST,
    (Direction.NORTH, Direction.EAST): Direction.NORTHEAST,
    (Direction.NORTH, Direction.WEST): Direction.NORTHWEST,
    (Direction.WEST, Direction.NORTH): Direction.NORTHWEST,
    (Direction.WEST, Direction.SOUTH): Direction.SOUTHWEST,
    (Direction.SOUTH, Direction.EAST): Direction.SOUTHEAST,
    (Direction.SOUTH, Direction.WEST): Direction.SOUTHWEST,
}

# Per-unit step of each direction in (x, y); north is towards smaller y.
_STEP = {
    Direction.EAST: (1, 0),
    Direction.NORTHEAST: (1, -1),
    Direction.NORTH: (0, -1),
    Direction.NORTHWEST: (-1, -1),
    Direction.WEST: (-1, 0),
    Direction.SOUTHWEST: (-1, 1),
    Direction.SOUTH: (0, 1),
    Direction.SOUTHEAST: (1, 1),
    Direction.NODIR: (0, 0),
}

_CARDINAL = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


def opposite(direction: Direction) -> Direction:
    """The direction pointing the other way; NODIR stays NODIR."""
    return _OPPOSITE[Direction(direction)]


def diagonal(first: Direction, second: Direction) -> Direction:
    """The diagonal combining a horizontal and a vertical direction, else NODIR."""
    return _DIAGONAL.get((Direction(first), Direction(second)), Direction.NODIR)


@dataclass
class Actor:
    """An enemy's position, goal tile and movement state."""

    x: int
    y: int
    goal_x: int
    goal_y: int
    area_number: int = 0
    direction: Direction = Direction.NODIR
    distance: int = 0
    number: int = 1
    waiting_door: bool = False
    not_moving: bool = True
    can_open_doors: bool = True


class Mover:
    """Moves actors around a level's tile map, opening doors as needed."""

    def __init__(self, tilemap: TileMap, doors: DoorSystem, *,
                 rng: Optional[Callable[[], int]] = None,
                 min_actor_dist: int = DEFAULT_MIN_ACTOR_DIST) -> None:
        self.tilemap = tilemap
        self.doors = doors
        self.rng = rng if rng is not None else (lambda: random.randrange(256))
        self.min_actor_dist = min_actor_dist
        self.actor_at: dict[tuple[int, int], int] = {}

    def _player_visible(self, actor: Actor) -> bool:
        area = actor.area_number
        if self.doors.area_sound is not None:
            area = self.doors.area_sound[area]
        return area in self.doors.area_by_player

    def _touches_player(self, x: int, y: int) -> bool:
        return (abs(x - self.doors.player_x) < self.min_actor_dist
                and abs(y - self.doors.player_y) < self.min_actor_dist)

    def check_diag(self, x: int, y: int) -> bool:
        """Whether a tile is free for a diagonal step."""
        return not self.tilemap[x, y] & (TileFlag.BLOCKMOVE | TileFlag.ACTOR)

    def check_side(self, x: int, y: int, actor: Actor) -> int:
        """0 if blocked, 1 if open, 2 if a door must be opened first."""
        tile = self.tilemap[x, y]
        if tile & TileFlag.DOOR:
            if not tile & TileFlag.BLOCKMOVE:
                return 1
            return 2 if actor.can_open_doors else 0
        if tile & (TileFlag.BLOCKMOVE | TileFlag.ACTOR):
            return 0
        return 1

    def try_walk(self, actor: Actor) -> bool:
        """Start the actor towards the next tile in its direction.

        Returns False when blocked. A closed door in the way is told to open
        and the actor is left waiting for it, which counts as success.
        """
        x, y = actor.goal_x, actor.goal_y
        direction = actor.direction
        if direction in _CARDINAL:
            dx, dy = _STEP[direction]
            x += dx
            y += dy
            side = self.check_side(x, y, actor)
            if not side:
                return False
            if side == 2:
                door = self.doors.doors[self.tilemap[x, y] & TileFlag.NUMMASK]
                self.doors.open_door(door)
                actor.waiting_door = True
                actor.not_moving = True
                return True
        elif direction is not Direction.NODIR:
            dx, dy = _STEP[direction]
            if not self.check_diag(x + dx, y):
                return False
            y += dy
            if not self.check_diag(x, y):
                return False
            x += dx
            if not self.check_diag(x, y):
                return False

        if self._player_visible(actor) and self._touches_player(
                (x << FRAC_BITS) | 0x80, (y << FRAC_BITS) | 0x80):
            return False

        self.tilemap.clear_flags(actor.goal_x, actor.goal_y, TileFlag.ACTOR)
        tile = self.tilemap[x, y]
        self.tilemap.set_flags(x, y, TileFlag.ACTOR)
        self.actor_at[(x, y)] = actor.number
        actor.goal_x = x
        actor.goal_y = y
        if not tile & TileFlag.DOOR:
            actor.area_number = tile & TileFlag.NUMMASK
        actor.distance = TILE_GLOBAL
        actor.waiting_door = False
        actor.not_moving = False
        return True

    def _try_directions(self, actor: Actor, choices, turnaround: Direction) -> bool:
        for choice in choices:
            if choice is not Direction.NODIR and choice is not turnaround:
                actor.direction = choice
                if self.try_walk(actor):
                    return True
        return False

    def _give_up(self, actor: Actor, turnaround: Direction) -> None:
        if turnaround is not Direction.NODIR:
            actor.direction = turnaround
            if self.try_walk(actor):
                return
        actor.direction = Direction.NODIR
        actor.not_moving = True

    def select_dodge_dir(self, actor: Actor) -> None:
        """Head towards the player while weaving to dodge fire."""
        turnaround = opposite(actor.direction)
        delta_x = self.doors.player_x - actor.x
        delta_y = self.doors.player_y - actor.y

        horizontal = (Direction.EAST, Direction.WEST) if delta_x > 0 else (Direction.WEST, Direction.EAST)
        vertical = (Direction.SOUTH, Direction.NORTH) if delta_y > 0 else (Direction.NORTH, Direction.SOUTH)
        tries = [horizontal[0], vertical[0], horizontal[1], vertical[1]]

        def swap() -> None:
            tries[0], tries[1] = tries[1], tries[0]
            tries[2], tries[3] = tries[3], tries[2]

        if abs(delta_x) > abs(delta_y):
            swap()
        if self.rng() & 1:
            swap()
        tries.insert(0, diagonal(tries[0], tries[1]))

        if self._try_directions(actor, tries, turnaround):
            return
        self._give_up(actor, turnaround)

    def select_chase_dir(self, actor: Actor) -> None:
        """Head straight for the player, searching around when blocked."""
        old = Direction(actor.direction)
        turnaround = opposite(old)
        delta_x = self.doors.player_x - actor.x
        delta_y = self.doors.player_y - actor.y

        if delta_x > 0:
            first = Direction.EAST
        elif delta_x == 0:
            first = Direction.NODIR
        else:
            first = Direction.WEST
        if delta_y > 0:
            second = Direction.SOUTH
        elif delta_y == 0:
            second = Direction.NODIR
        else:
            second = Direction.NORTH
        if abs(delta_y) > abs(delta_x):
            first, second = second, first

        if first is turnaround:
            first = Direction.NODIR
        if second is turnaround:
            second = Direction.NODIR

        for choice in (first, second):
            if choice is not Direction.NODIR:
                actor.direction = choice
                if self.try_walk(actor):
                    return

        if old is not Direction.NODIR:
            actor.direction = old
            if self.try_walk(actor):
                return

        search = [Direction(value) for value in range(Direction.NORTH, Direction.WEST + 1)]
        if not self.rng() & 1:
            search.reverse()
        if self._try_directions(actor, search, turnaround):
            return
        self._give_up(actor, turnaround)

    def move_actor(self, actor: Actor, move: int) -> bool:
        """Move ``move`` units in the actor's direction unless that lands on the player.

        The tile map is not consulted. Returns whether the actor moved.
        """
        dx, dy = _STEP[Direction(actor.direction)]
        try_x = actor.x + dx * move
        try_y = actor.y + dy * move
        if self._player_visible(actor) and self._touches_player(try_x, try_y):
            return False
        actor.distance -= move
        actor.x = try_x
        actor.y = try_y
        return True