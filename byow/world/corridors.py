from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from .tiles import CORRIDOR, WALL

if TYPE_CHECKING:  # pragma: no cover
    from .grid import World


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Corridor:
    id: int
    start: Point
    end: Point
    is_turning: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_turning", self.start.x != self.end.x and self.start.y != self.end.y)

    def to_dict(self):
        return {
            "id": self.id,
            "start": {"x": self.start.x, "y": self.start.y},
            "end": {"x": self.end.x, "y": self.end.y},
            "isTurning": self.is_turning,
        }


def _carve_cell(world: "World", x: int, y: int) -> int:
    if world.in_bounds(x, y) and world.get_tile(x, y) == WALL:
        world.set_tile(x, y, CORRIDOR)
        return 1
    return 0


def draw_corridor(world: "World", start: Point, end: Point) -> int:
    """Carve an L-shaped corridor from ``start`` to ``end``.

    Walks the horizontal leg first, then the vertical leg. Only WALL cells are
    converted, so room interiors crossed on the way stay ROOM. Returns the
    number of cells carved.
    """
    x, y = start
    carved = 0
    step_x = 1 if end.x > x else -1
    while x != end.x:
        carved += _carve_cell(world, x, y)
        x += step_x
    step_y = 1 if end.y > y else -1
    while y != end.y:
        carved += _carve_cell(world, x, y)
        y += step_y
    carved += _carve_cell(world, end.x, end.y)
    return carved


__all__ = ["Point", "Corridor", "draw_corridor"]
