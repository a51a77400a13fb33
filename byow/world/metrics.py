from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'placement_attempts': 0,
        'rooms_placed': 0,
        'rooms_rejected': 0,
        'fallback_room': False,
        'corridors_carved': 0,
        'tiles_carved': 0,
        'connection_passes': 0,
        'runtime_ms': 0.0,
    }
