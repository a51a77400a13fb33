"""Public world package interface.

Deterministic room-and-corridor world generation, connectivity checks,
room-to-room path queries and snapshot encoding.
"""

from .config import DEFAULT_CONFIG, WorldConfig
from .connectivity import connect_rooms_nearest, connect_rooms_with_mst, is_world_connected
from .corridors import Corridor, Point, draw_corridor
from .disjoint_set import INVALID, DisjointSet
from .errors import (
    AllocationFailure,
    EncodingOverflow,
    InvalidDimension,
    InvalidRoomId,
    NoPath,
    WorldError,
)
from .generator import generate
from .grid import MIN_DIMENSION, World, create_world
from .pathfinding import PathResult, RoomGraph, find_path, find_shortest_path
from .rng import Lcg
from .rooms import Room, ensure_at_least_one_room, generate_rooms, room_distance, rooms_overlap
from .snapshot import dumps_snapshot, encode_snapshot, render_ascii
from .tiles import CORRIDOR, FLOOR, ROOM, WALL, Tile  # noqa: F401

__all__ = [
    "WorldConfig",
    "DEFAULT_CONFIG",
    "World",
    "create_world",
    "generate",
    "MIN_DIMENSION",
    "Lcg",
    "Room",
    "rooms_overlap",
    "room_distance",
    "generate_rooms",
    "ensure_at_least_one_room",
    "Corridor",
    "Point",
    "draw_corridor",
    "DisjointSet",
    "INVALID",
    "connect_rooms_with_mst",
    "connect_rooms_nearest",
    "is_world_connected",
    "RoomGraph",
    "PathResult",
    "find_shortest_path",
    "find_path",
    "encode_snapshot",
    "dumps_snapshot",
    "render_ascii",
    "WorldError",
    "InvalidDimension",
    "AllocationFailure",
    "NoPath",
    "InvalidRoomId",
    "EncodingOverflow",
    "Tile",
    "FLOOR",
    "WALL",
    "ROOM",
    "CORRIDOR",
]
