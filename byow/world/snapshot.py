"""Structured snapshot of a world for external consumers.

Schema (keys are part of the wire contract):

    {
      "seed": int, "width": int, "height": int,
      "roomCount": int, "corridorCount": int,
      "rooms": [{"id", "x", "y", "width", "height"}, ...],
      "corridors": [{"id", "start": {"x", "y"}, "end": {"x", "y"}, "isTurning"}, ...],
      "map": [[tile, ...], ...]   # row-major, tile codes 0..3
    }

``dumps_snapshot`` enforces a byte capacity on the encoded document and raises
``EncodingOverflow`` instead of returning truncated JSON.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .errors import EncodingOverflow
from .tiles import tile_to_char

if TYPE_CHECKING:  # pragma: no cover
    from .grid import World

_SEPARATORS = (",", ":")


def encode_rooms(world: "World") -> List[Dict[str, int]]:
    return [r.to_dict() for r in world.rooms if r.exists]


def encode_corridors(world: "World") -> List[Dict[str, Any]]:
    return [c.to_dict() for c in world.corridors]


def encode_map(world: "World") -> List[List[int]]:
    return [list(row) for row in world.tiles]


def encode_snapshot(world: "World") -> Dict[str, Any]:
    return {
        "seed": world.seed,
        "width": world.width,
        "height": world.height,
        "roomCount": world.room_count,
        "corridorCount": world.corridor_count,
        "rooms": encode_rooms(world),
        "corridors": encode_corridors(world),
        "map": encode_map(world),
    }


def dumps_bounded(payload: Any, capacity: Optional[int]) -> str:
    """Compact-encode ``payload``; raise EncodingOverflow past ``capacity`` UTF-8 bytes."""
    text = json.dumps(payload, separators=_SEPARATORS)
    if capacity is not None:
        size = len(text.encode("utf-8"))
        if size > capacity:
            raise EncodingOverflow(f"encoded snapshot is {size} bytes, capacity is {capacity}")
    return text


def dumps_snapshot(world: "World", capacity: Optional[int] = None) -> str:
    if capacity is None:
        capacity = world.config.snapshot_capacity
    return dumps_bounded(encode_snapshot(world), capacity)


def render_ascii(world: "World") -> str:
    """Plain-text render of the grid, one line per row."""
    return "\n".join("".join(tile_to_char(t) for t in row) for row in world.tiles)


__all__ = [
    "encode_rooms",
    "encode_corridors",
    "encode_map",
    "encode_snapshot",
    "dumps_bounded",
    "dumps_snapshot",
    "render_ascii",
]
