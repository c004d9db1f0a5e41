import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from blocks import BLOCK_ID
from megatree import generate
from tree_plan import STATUS_ABORTED, STATUS_COMPLETED, STATUS_SCHEDULED

OUTER = BLOCK_ID['Oak Log']
INNER = BLOCK_ID['Stripped Oak Log']
LEAVES = BLOCK_ID['Oak Leaves']
OPTIONS = {'seed': 3, 'trunk_radius': 3, 'trunk_height': 8, 'canopy_radius': 4, 'step_delay_ms': 50}


def test_layered_growth_completes(air_world, manual_clock):
    calls = []
    result = generate(air_world, (0, 0, 0), dict(OPTIONS, on_complete=calls.append), clock=manual_clock)
    assert result.status == STATUS_SCHEDULED
    assert air_world.count(OUTER) + air_world.count(INNER) == 0

    manual_clock.run_until_idle()
    growth = result.scheduler
    assert result.status == STATUS_COMPLETED
    # 8 trunk layers, then a dome 5 layers tall.
    assert len(growth.layers) == 13
    assert manual_clock.delays == [50] * 12
    assert calls == [{'seed': 3, 'placed': result.placed}]
    assert result.placed == len(result.plan.writes)
    assert air_world.get_block((0, 0, 0)) in (OUTER, INNER)
    assert air_world.get_block((0, 7, 0)) in (OUTER, INNER)
    assert air_world.count(LEAVES) > 0
    assert all(6 <= y <= 10 for _, y, _ in air_world.positions_of(LEAVES))


def test_layered_batches_respect_limit(air_world, manual_clock):
    result = generate(air_world, (0, 0, 0), dict(OPTIONS, max_blocks_per_tick=5), clock=manual_clock)
    before = 0
    while manual_clock.queue:
        manual_clock.run_turn()
        now = air_world.count(OUTER) + air_world.count(INNER) + air_world.count(LEAVES)
        assert now - before <= 5
        before = now
    assert result.status == STATUS_COMPLETED
    assert result.scheduler.turns > len(result.scheduler.layers)


def test_layered_abort_keeps_lower_layers(air_world, manual_clock):
    air_world.set_block((0, 3, 0), BLOCK_ID['Chest'])
    calls = []
    result = generate(air_world, (0, 0, 0), dict(OPTIONS, on_complete=calls.append), clock=manual_clock)
    manual_clock.run_until_idle()
    assert result.status == STATUS_ABORTED
    assert result.position == (0, 3, 0)
    assert calls == []
    assert manual_clock.delays == [50] * 3
    logs = air_world.positions_of(OUTER) + air_world.positions_of(INNER)
    assert logs
    assert set(y for _, y, _ in logs) == {0, 1, 2}
    assert result.placed == len(logs)
    assert air_world.count(LEAVES) == 0
    assert air_world.get_block((0, 3, 0)) == BLOCK_ID['Chest']
