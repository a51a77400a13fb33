"""World container and bounds-checked tile grid.

The grid is stored row-major (``tiles[y][x]``) so the snapshot ``map`` can be
emitted without transposing. All coordinate access goes through
``get_tile``/``set_tile``; out-of-range reads report WALL and out-of-range
writes are ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from .config import DEFAULT_CONFIG, MIN_DIMENSION, WorldConfig
from .disjoint_set import DisjointSet
from .errors import AllocationFailure, InvalidDimension
from .metrics import init_metrics
from .pathfinding import RoomGraph
from .tiles import WALL

if TYPE_CHECKING:  # pragma: no cover
    from .corridors import Corridor
    from .rooms import Room


class World:
    def __init__(self, seed: int, width: int, height: int, config: Optional[WorldConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.seed = seed
        self.width = width
        self.height = height
        self.tiles: List[List[int]] = [[int(WALL)] * width for _ in range(height)]
        self.rooms: List[Room] = []
        self.corridors: List[Corridor] = []
        self.graph = RoomGraph()
        self.disjoint_set = DisjointSet(self.config.max_rooms)
        self.metrics: Dict[str, Any] = init_metrics()
        self.released = False

    # ------------------------------------------------------------------
    # Tiles
    # ------------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return int(WALL)
        return self.tiles[y][x]

    def set_tile(self, x: int, y: int, tile: int) -> None:
        if self.in_bounds(x, y):
            self.tiles[y][x] = int(tile)

    def count_tiles(self, tile: int) -> int:
        return sum(row.count(int(tile)) for row in self.tiles)

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------
    @property
    def room_count(self) -> int:
        return len(self.rooms)

    @property
    def corridor_count(self) -> int:
        return len(self.corridors)

    def existing_rooms(self) -> Iterator[Room]:
        return (r for r in self.rooms if r.exists)

    def has_room(self, room_id: int) -> bool:
        return 0 <= room_id < len(self.rooms) and self.rooms[room_id].exists

    def remove_room(self, room_id: int) -> bool:
        """Tombstone a room. Its slot (and id) stays reserved; tiles are left untouched.

        The room graph and corridors still reflect the last connection pass
        until the connector is run again.
        """
        if not self.has_room(room_id):
            return False
        self.rooms[room_id].exists = False
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def release(self) -> None:
        self.tiles = []
        self.width = self.height = 0
        self.rooms = []
        self.corridors = []
        self.graph.clear()
        self.disjoint_set.init(0)
        self.released = True

    def __repr__(self):
        return (
            f"<World seed={self.seed} size={self.width}x{self.height} "
            f"rooms={self.room_count} corridors={self.corridor_count}>"
        )


def create_world(seed: int, width: int, height: int, config: Optional[WorldConfig] = None) -> World:
    """Allocate an all-WALL world.

    Raises:
        InvalidDimension: ``width`` or ``height`` is below 5.
        AllocationFailure: the grid could not be allocated.

    Oversized requests are clamped to ``config.max_width``/``max_height`` rather
    than rejected.
    """
    config = config or DEFAULT_CONFIG
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise InvalidDimension(f"world must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, got {width}x{height}")
    width = min(width, config.max_width)
    height = min(height, config.max_height)
    try:
        return World(seed, width, height, config)
    except MemoryError as exc:
        raise AllocationFailure(f"could not allocate {width}x{height} world") from exc


__all__ = ["World", "create_world", "MIN_DIMENSION"]
