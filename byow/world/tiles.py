# Tile codes centralized for modular imports. Values are part of the snapshot wire format.
from enum import IntEnum


class Tile(IntEnum):
    FLOOR = 0
    WALL = 1
    ROOM = 2
    CORRIDOR = 3


FLOOR = Tile.FLOOR
WALL = Tile.WALL
ROOM = Tile.ROOM
CORRIDOR = Tile.CORRIDOR

_CHARS = {
    FLOOR: " ",
    WALL: "#",
    ROOM: ".",
    CORRIDOR: "+",
}


def tile_to_char(tile: int) -> str:
    return _CHARS.get(tile, "?")


def tile_name(tile: int) -> str:
    try:
        return Tile(tile).name.lower()
    except ValueError:
        return "unknown"


__all__ = ["Tile", "FLOOR", "WALL", "ROOM", "CORRIDOR", "tile_to_char", "tile_name"]
