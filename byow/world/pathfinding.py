"""Room adjacency graph and breadth-first room-to-room path queries.

The graph is built over room ids by the connectors, not over tiles. Each
room keeps an ordered neighbor list with the most recently connected room
first; BFS visits neighbors in that order, so among several shortest paths the
one through the newest corridors wins.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional

from .errors import InvalidRoomId, NoPath, WorldError

if TYPE_CHECKING:  # pragma: no cover
    from .grid import World


class PathResult(NamedTuple):
    path: List[int]
    length: int

    def to_dict(self):
        return {"path": list(self.path), "length": self.length}


class RoomGraph:
    def __init__(self):
        self._adjacency: Dict[int, List[int]] = {}

    def clear(self) -> None:
        self._adjacency.clear()

    def add_edge(self, a: int, b: int) -> None:
        self._adjacency.setdefault(a, []).insert(0, b)
        self._adjacency.setdefault(b, []).insert(0, a)

    def neighbors(self, room_id: int) -> List[int]:
        return list(self._adjacency.get(room_id, ()))

    def has_edge(self, a: int, b: int) -> bool:
        return b in self._adjacency.get(a, ())

    def edge_count(self) -> int:
        return sum(len(v) for v in self._adjacency.values()) // 2

    def __len__(self):
        return len(self._adjacency)


def _validate_room(world: "World", room_id: int) -> None:
    if not isinstance(room_id, int) or room_id < 0 or room_id >= world.room_count:
        raise InvalidRoomId(f"room id {room_id!r} out of range (room count {world.room_count})")
    if not world.rooms[room_id].exists:
        raise InvalidRoomId(f"room {room_id} does not exist")


def find_shortest_path(world: "World", start_room_id: int, end_room_id: int, max_length: int) -> List[int]:
    """Return the room ids on a shortest corridor path from start to end (inclusive).

    Raises:
        InvalidRoomId: either id is out of range or tombstoned.
        NoPath: end is unreachable, or the path would be longer than ``max_length``.
    """
    _validate_room(world, start_room_id)
    _validate_room(world, end_room_id)
    if max_length <= 0:
        raise NoPath("max_length must be positive")
    if start_room_id == end_room_id:
        return [start_room_id]

    parent: Dict[int, Optional[int]] = {start_room_id: None}
    queue = deque([start_room_id])
    found = False
    while queue:
        current = queue.popleft()
        if current == end_room_id:
            found = True
            break
        for nxt in world.graph.neighbors(current):
            if nxt in parent or not world.has_room(nxt):
                continue
            parent[nxt] = current
            queue.append(nxt)
    if not found:
        raise NoPath(f"no path from room {start_room_id} to room {end_room_id}")

    path: List[int] = []
    node: Optional[int] = end_room_id
    while node is not None:
        path.append(node)
        if len(path) > max_length:
            raise NoPath(f"path from room {start_room_id} to room {end_room_id} exceeds {max_length} rooms")
        node = parent[node]
    path.reverse()
    return path


def find_path(world: "World", start_room_id: int, end_room_id: int) -> Optional[PathResult]:
    """Path query used by the HTTP and CLI layers; None means not found."""
    try:
        path = find_shortest_path(world, start_room_id, end_room_id, world.config.max_path_length)
    except WorldError:
        return None
    return PathResult(path, len(path))


__all__ = ["RoomGraph", "PathResult", "find_shortest_path", "find_path"]
