import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from distance_field import build_distance_field
from megatree import plan_tree


def test_single_source_is_chebyshev():
    field = build_distance_field([(10, 20, 30)])
    assert field.shape == (13, 13, 13)
    assert field.get((10, 20, 30)) == 0
    assert field.get((13, 20, 30)) == 3
    assert field.get((12, 25, 31)) == 5
    assert field.get((16, 26, 24)) == 6
    assert field.get((17, 20, 30)) is None
    assert (10, 20, 30) in field
    assert (17, 20, 30) not in field
    assert field.count_defined() == 13 ** 3


def test_max_distance_cutoff():
    field = build_distance_field([(0, 0, 0)], max_distance=2)
    assert field.get((2, 2, 2)) == 2
    assert field.get((3, 0, 0)) is None


def test_empty_logs():
    field = build_distance_field([])
    assert field.get((0, 0, 0)) is None
    assert field.count_defined() == 0


def test_multiple_sources_take_nearest():
    field = build_distance_field([(0, 0, 0), (8, 0, 0), (8, 0, 0)])
    assert field.get((4, 0, 0)) == 4
    assert field.get((5, 0, 0)) == 3
    assert field.get((8, 3, 0)) == 3


def test_lookup_matches_get():
    field = build_distance_field([(0, 0, 0), (3, 4, -2)])
    cells = np.array([(x, y, z) for x in range(-8, 11, 3) for y in range(-8, 12, 4) for z in range(-9, 8, 2)])
    got = field.lookup(cells)
    expected = [field.get(tuple(c)) for c in cells.tolist()]
    expected = [-1 if d is None else d for d in expected]
    assert got.tolist() == expected


def test_bfs_and_dense_agree_on_tree(air_world):
    plan = plan_tree(air_world, (0, 0, 0), {'seed': 3, 'trunk_radius': 3, 'trunk_height': 12})
    dense = build_distance_field(plan.logs, use_bfs=False)
    bfs = build_distance_field(plan.logs, use_bfs=True)
    assert dense.lo == bfs.lo
    assert np.array_equal(dense.grid, bfs.grid)
    assert dense.grid.max() == config.LEAF_MAX_DISTANCE
    assert dense.grid.min() == -1
