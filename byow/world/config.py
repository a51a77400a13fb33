from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

CONNECTORS = ("mst", "nearest")

# Smallest grid that fits a 3x3 room plus a one-cell border
MIN_DIMENSION = 5

# Per-field lower bounds; anything below is rejected
_MINIMUMS = {
    "max_width": MIN_DIMENSION,
    "max_height": MIN_DIMENSION,
    "max_rooms": 1,
    "max_corridors": 0,
    "max_path_length": 1,
    "min_room_size": 1,
    "max_room_size": 1,
    "room_budget": 0,
    "attempts_per_room": 1,
    "fallback_room_size": 1,
    "snapshot_capacity": 1,
}


@dataclass
class WorldConfig:
    max_width: int = 100
    max_height: int = 100
    max_rooms: int = 50
    max_corridors: int = 100
    max_path_length: int = 256
    min_room_size: int = 3
    max_room_size: int = 6
    room_budget: int = 25
    attempts_per_room: int = 5
    fallback_room_size: int = 3
    allow_touching_rooms: bool = False
    snapshot_capacity: int = 131072
    connector: str = "mst"

    def __post_init__(self):
        for name, minimum in _MINIMUMS.items():
            if getattr(self, name) < minimum:
                raise ValueError(f"{name} must be at least {minimum}, got {getattr(self, name)}")
        if self.max_room_size < self.min_room_size:
            raise ValueError("max_room_size must not be smaller than min_room_size")
        # A spanning tree over max_rooms rooms needs max_rooms - 1 corridors
        if self.max_corridors < self.max_rooms - 1:
            raise ValueError(
                f"max_corridors ({self.max_corridors}) cannot connect {self.max_rooms} rooms"
            )
        if self.connector not in CONNECTORS:
            raise ValueError(f"unknown connector {self.connector!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "BYOW_") -> "WorldConfig":
        """Build a config from ``BYOW_*`` variables (e.g. ``BYOW_MAX_WIDTH``).

        Unknown keys are ignored; malformed or out-of-range values keep the
        default, so a typo in the environment never prevents the server from
        starting. If the room and corridor limits are inconsistent with each
        other, both fall back to their defaults.
        """
        if environ is None:
            import os

            environ = os.environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            raw = raw.strip()
            if f.type in (bool, "bool"):
                overrides[f.name] = raw.lower() not in {"0", "false", "no", "off", ""}
            elif f.type in (int, "int"):
                try:
                    value = int(raw)
                except ValueError:
                    continue
                if value >= _MINIMUMS.get(f.name, value):
                    overrides[f.name] = value
            elif f.name == "connector":
                if raw.lower() in CONNECTORS:
                    overrides[f.name] = raw.lower()
            else:
                overrides[f.name] = raw
        try:
            return replace(cls(), **overrides)
        except ValueError:
            for name in ("max_rooms", "max_corridors", "min_room_size", "max_room_size"):
                overrides.pop(name, None)
            return replace(cls(), **overrides)


DEFAULT_CONFIG = WorldConfig()

__all__ = ["WorldConfig", "DEFAULT_CONFIG", "CONNECTORS", "MIN_DIMENSION"]
