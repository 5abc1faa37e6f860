from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'floors': 0,
        'rooms': 0,
        'stair_links': 0,
        'stairs_placed': 0,
        'stairs_omitted': 0,
        'exits': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'rng_draws': 0,
        'builder_usage': {},
        'runtime_ms': 0.0,
    }
