from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'levels': 0,
        'leaves': 0,
        'leaves_selected': 0,
        'rooms': 0,
        'rooms_skipped': 0,
        'corridors': 0,
        'connections': 0,
        'extra_connections': 0,
        'doors': 0,
        'secret_doors': 0,
        'features': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
