import time
import pytest
from undercroft.dungeon import Dungeon, DungeonLayoutConfig, GenerationConfig

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.

@pytest.mark.performance
def test_dungeon_generation_tall_seeds():
    layout = DungeonLayoutConfig(floor_size=(4, 6), floors_above=(1, 2), floors_below=(1, 2))
    config = GenerationConfig(layout=layout, max_room_attempts=500)
    seeds = [10101, 20202, 30303]
    max_seconds_per = 5.0  # generous threshold; tune as needed
    timings = []
    for s in seeds:
        start = time.perf_counter()
        d = Dungeon(seed=s, config=config)
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert len(d.rooms) == d.metrics['rooms']
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings)/len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"
