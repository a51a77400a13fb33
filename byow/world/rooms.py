from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Tuple

from .tiles import ROOM

if TYPE_CHECKING:  # pragma: no cover
    from .grid import World
    from .rng import Lcg


@dataclass
class Room:
    id: int
    x: int
    y: int
    width: int
    height: int
    exists: bool = True

    def cells(self):
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def to_dict(self):
        return {"id": self.id, "x": self.x, "y": self.y, "width": self.width, "height": self.height}


def rooms_overlap(a: Room, b: Room, allow_touching: bool = False) -> bool:
    """Axis-aligned overlap test.

    The default test is inclusive: rooms sharing an edge (no gap cell between
    them) count as overlapping. With ``allow_touching`` only rooms that share
    at least one cell overlap.
    """
    if allow_touching:
        return not (
            a.x + a.width <= b.x
            or b.x + b.width <= a.x
            or a.y + a.height <= b.y
            or b.y + b.height <= a.y
        )
    return not (
        a.x + a.width < b.x
        or b.x + b.width < a.x
        or a.y + a.height < b.y
        or b.y + b.height < a.y
    )


def room_distance(a: Room, b: Room) -> int:
    """Euclidean distance between room centers, truncated to an int."""
    (ax, ay), (bx, by) = a.center, b.center
    return int(math.sqrt((ax - bx) ** 2 + (ay - by) ** 2))


def _overlaps_any(room: Room, existing: Iterable[Room], allow_touching: bool) -> bool:
    for r in existing:
        if r.exists and rooms_overlap(room, r, allow_touching):
            return True
    return False


def _carve(world: "World", room: Room) -> None:
    for ix, iy in room.cells():
        world.set_tile(ix, iy, ROOM)


def generate_rooms(world: "World", rng: "Lcg", min_size: int, max_size: int, max_rooms: int) -> int:
    """Scatter non-overlapping rooms by rejection sampling.

    Makes at most ``max_rooms * attempts_per_room`` attempts and stops early
    once ``max_rooms`` rooms exist. Sizes are drawn from ``[min_size, max_size]``
    with the upper bound clamped so a room always keeps a one-cell margin from
    the border. Returns the number of rooms placed by this call.
    """
    config = world.config
    max_rooms = min(max_rooms, config.max_rooms)
    max_w = min(max_size, world.width - 2)
    max_h = min(max_size, world.height - 2)
    if max_rooms <= 0 or max_w < min_size or max_h < min_size:
        return 0
    attempts = 0
    max_attempts = max_rooms * config.attempts_per_room
    placed = 0
    while world.room_count < max_rooms and attempts < max_attempts:
        attempts += 1
        w = rng.randint(min_size, max_w)
        h = rng.randint(min_size, max_h)
        x = rng.randint(1, world.width - w - 1)
        y = rng.randint(1, world.height - h - 1)
        candidate = Room(world.room_count, x, y, w, h)
        if _overlaps_any(candidate, world.rooms, config.allow_touching_rooms):
            world.metrics['rooms_rejected'] += 1
            continue
        world.rooms.append(candidate)
        _carve(world, candidate)
        placed += 1
    world.metrics['placement_attempts'] += attempts
    world.metrics['rooms_placed'] += placed
    return placed


def ensure_at_least_one_room(world: "World") -> bool:
    """Place a centered fallback room when placement produced nothing.

    Returns True if a room was placed. Grids too small for the fallback are
    left with zero rooms (still a valid, trivially connected world).
    """
    if any(True for _ in world.existing_rooms()):
        return False
    size = world.config.fallback_room_size
    if world.room_count >= world.config.max_rooms:
        return False
    if world.width < size + 2 or world.height < size + 2:
        return False
    x = max(1, (world.width - size) // 2)
    y = max(1, (world.height - size) // 2)
    x = min(x, world.width - size - 1)
    y = min(y, world.height - size - 1)
    room = Room(world.room_count, x, y, size, size)
    world.rooms.append(room)
    _carve(world, room)
    world.metrics['fallback_room'] = True
    return True


__all__ = ["Room", "rooms_overlap", "room_distance", "generate_rooms", "ensure_at_least_one_room"]
