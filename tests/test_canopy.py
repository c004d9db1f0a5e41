import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from blocks import BLOCK_ID
from canopy import build_canopy, leaf_radius, seal_canopy
from distance_field import build_distance_field
from megatree import plan_tree
from tree_plan import TreePlan

LEAVES = BLOCK_ID['Oak Leaves']


def _small_plan(world, seed=8):
    return plan_tree(world, (0, 0, 0), {'seed': seed, 'trunk_radius': 3, 'trunk_height': 12})


def test_leaf_radius_by_level():
    assert leaf_radius(0) == config.LEAF_RADIUS_BY_LEVEL[0]
    assert leaf_radius(2) == config.LEAF_RADIUS_BY_LEVEL[2]
    assert leaf_radius(9) == config.LEAF_RADIUS_BY_LEVEL[-1]


def test_leaves_stay_in_distance_band(air_world):
    plan = _small_plan(air_world)
    leaves = [cell for cell, block in plan.writes if block == LEAVES]
    assert leaves
    assert plan.leaf_count == len(leaves)
    for cell in leaves:
        d = plan.field.get(cell)
        assert d is not None and 1 <= d <= config.LEAF_MAX_DISTANCE


def test_writes_are_unique(air_world):
    plan = _small_plan(air_world)
    cells = [cell for cell, _ in plan.writes]
    assert len(cells) == len(set(cells))
    assert len(plan.claimed) == len(cells)


def test_leaves_skip_protected_cells(air_world):
    plan = _small_plan(air_world)
    targets = [cell for cell, block in plan.writes if block == LEAVES][::7][:10]
    for cell in targets:
        air_world.set_block(cell, BLOCK_ID['Shulker Box'])
    again = _small_plan(air_world)
    cells = set(cell for cell, _ in again.writes)
    assert not cells & set(targets)


def test_seal_caps_exposed_log_tops(air_world):
    plan = TreePlan(air_world, (0, 0, 0), 1)
    log = BLOCK_ID['Oak Log']
    for y in range(5):
        plan.add_log((0, y, 0), log)
    plan.field = build_distance_field(plan.logs)
    added = seal_canopy(plan)
    # The cap plus its 26 neighbours, less the top log itself.
    assert added == 26
    assert ((0, 5, 0), LEAVES) in plan.writes
    assert ((1, 4, 0), LEAVES) in plan.writes
    assert ((0, 4, 0), LEAVES) not in plan.writes


def test_seal_requires_open_air(air_world):
    air_world.set_block((0, 5, 0), BLOCK_ID['Stone'])
    plan = TreePlan(air_world, (0, 0, 0), 1)
    plan.add_log((0, 4, 0), BLOCK_ID['Oak Log'])
    plan.field = build_distance_field(plan.logs)
    assert seal_canopy(plan) == 0
    assert build_canopy(plan) == 0
