"""Room connection passes and connectivity checks.

Both connectors rebuild corridors, the room graph and the disjoint-set from
scratch, so re-running either one on the same world never duplicates edges.
Corridor tiles carved by an earlier pass are not reverted.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from .corridors import Corridor, Point, draw_corridor
from .rooms import Room, room_distance

if TYPE_CHECKING:  # pragma: no cover
    from .grid import World

Edge = Tuple[int, int, int]  # (weight, room_a, room_b)


def _reset_connections(world: "World") -> List[Room]:
    world.graph.clear()
    world.corridors = []
    world.disjoint_set.init(world.room_count)
    world.metrics['connection_passes'] += 1
    world.metrics['corridors_carved'] = 0
    return [r for r in world.rooms if r.exists]


def _link(world: "World", a: Room, b: Room) -> bool:
    """Create, carve and record a corridor between two room centers."""
    if world.corridor_count >= world.config.max_corridors:
        return False
    corridor = Corridor(world.corridor_count, Point(*a.center), Point(*b.center))
    world.corridors.append(corridor)
    world.metrics['tiles_carved'] += draw_corridor(world, corridor.start, corridor.end)
    world.metrics['corridors_carved'] += 1
    world.graph.add_edge(a.id, b.id)
    world.disjoint_set.union(a.id, b.id)
    return True


def build_edges(rooms: List[Room]) -> List[Edge]:
    """All room pairs weighted by center distance, sorted ascending.

    Ties are ordered by room ids so the result is deterministic.
    """
    edges: List[Edge] = []
    for idx, a in enumerate(rooms):
        for b in rooms[idx + 1:]:
            edges.append((room_distance(a, b), a.id, b.id))
    edges.sort()
    return edges


def connect_rooms_with_mst(world: "World") -> bool:
    """Connect every existing room with a spanning tree of corridors (Kruskal).

    Returns False without carving anything when fewer than two rooms exist.
    """
    rooms = _reset_connections(world)
    if len(rooms) < 2:
        return False
    ds = world.disjoint_set
    for _, i, j in build_edges(rooms):
        if ds.connected(i, j):
            continue
        if not _link(world, world.rooms[i], world.rooms[j]):
            break
    return True


def connect_rooms_nearest(world: "World") -> bool:
    """Link each room to its nearest later room (by id).

    Cheaper than the spanning tree and also yields ``rooms - 1`` corridors, but
    corridors are longer on average and may cross more rooms.
    """
    rooms = _reset_connections(world)
    if len(rooms) < 2:
        return False
    for idx, a in enumerate(rooms[:-1]):
        nearest = None
        best = None
        for b in rooms[idx + 1:]:
            dist = room_distance(a, b)
            if best is None or dist < best:
                best = dist
                nearest = b
        if nearest is not None and not _link(world, a, nearest):
            break
    return True


CONNECTORS = {
    "mst": connect_rooms_with_mst,
    "nearest": connect_rooms_nearest,
}


def is_world_connected(world: "World") -> bool:
    """True when every existing room shares a disjoint-set root with the first one.

    Worlds with zero or one room are connected by definition.
    """
    rooms = [r for r in world.rooms if r.exists]
    if len(rooms) < 2:
        return True
    ds = world.disjoint_set
    root = ds.find(rooms[0].id)
    return all(ds.find(r.id) == root for r in rooms[1:])


__all__ = [
    "connect_rooms_with_mst",
    "connect_rooms_nearest",
    "is_world_connected",
    "build_edges",
    "CONNECTORS",
]
