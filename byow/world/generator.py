"""Pipeline orchestration for world generation.

``generate`` is the single entry point used by the HTTP surface and the CLI:
allocate the grid, scatter rooms, guarantee at least one room, then connect
everything with the configured connector. The same ``(seed, width, height,
config)`` always yields the same tiles, rooms and corridors.
"""
from __future__ import annotations

import time
from typing import Optional

from .config import DEFAULT_CONFIG, WorldConfig
from .connectivity import CONNECTORS, connect_rooms_with_mst
from .grid import World, create_world
from .rng import Lcg
from .rooms import ensure_at_least_one_room, generate_rooms


def generate(seed: int, width: int, height: int, config: Optional[WorldConfig] = None) -> World:
    """Build a complete, connected world.

    Raises:
        InvalidDimension: ``width`` or ``height`` below the minimum.
        AllocationFailure: the grid could not be allocated.
    """
    config = config or DEFAULT_CONFIG
    world = create_world(seed, width, height, config)
    rng = Lcg(seed)
    phase_times = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
        return r

    _phase('place_rooms', generate_rooms, world, rng, config.min_room_size, config.max_room_size, config.room_budget)
    _phase('fallback_room', ensure_at_least_one_room, world)
    connector = CONNECTORS.get(config.connector, connect_rooms_with_mst)
    _phase('connect', connector, world)

    world.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
    world.metrics['phase_ms'] = phase_times
    return world


__all__ = ["generate"]
