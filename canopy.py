#std/external libs
from functools import lru_cache

import numpy

#local libs
import config
from blocks import BLOCK_ID
from hashnoise import hash_noise_array
from util import NEIGHBORS_26, cell_key, normalize
from world import is_blocked, is_open_air

LEAVES = BLOCK_ID['Oak Leaves']


@lru_cache(maxsize=16)
def _cube_offsets(reach):
    # Candidate offsets [-reach, reach]^3, x major then y then z. Noise
    # jitter can only trim this cube, never grow past it.
    d = numpy.mgrid[-reach:reach + 1, -reach:reach + 1, -reach:reach + 1]
    return d.reshape(3, -1).T.copy()


def leaf_radius(level):
    radii = config.LEAF_RADIUS_BY_LEVEL
    return radii[min(level, len(radii) - 1)]


def _leaf_band(d):
    return d is not None and 1 <= d <= config.LEAF_MAX_DISTANCE


def _claim_leaf(plan, cell):
    if plan.is_claimed(cell) or is_blocked(plan.world, cell):
        return False
    plan.add(cell, LEAVES)
    plan.leaf_count += 1
    return True


def _cluster_candidates(plan, center, base):
    """ Cells around `center` inside the noise-jittered sphere of radius
    `base` and inside the leaf distance band, in scan order.
    """
    offsets = _cube_offsets(base)
    cells = offsets + numpy.asarray(center)
    ox, oy, oz = plan.origin
    salt = plan.noise_salt
    n = hash_noise_array(cells[:, 0] - ox + salt, cells[:, 1] - oy, cells[:, 2] - oz - salt)
    r = base + numpy.floor(n * 5).astype(numpy.int64) - 2
    inside = (offsets * offsets).sum(axis=1) <= r * r
    cells = cells[inside]
    d = plan.field.lookup(cells)
    band = (d >= 1) & (d <= config.LEAF_MAX_DISTANCE)
    return cells[band]


def build_canopy(plan):
    """ Leaf clusters sampled along every branch segment.

    A candidate is kept iff it passes the jittered radius test, has a
    distance value in 1..LEAF_MAX_DISTANCE, is unclaimed and is not blocked.
    Blocked cells are skipped, never fatal. Returns the number of leaves added.
    """
    added = 0
    for segment in plan.segments:
        base = leaf_radius(segment.level)
        step = max(1, int(segment.radius * 2))
        for t in segment.steps(step):
            center = normalize(segment.point_at(t))
            for x, y, z in _cluster_candidates(plan, center, base).tolist():
                if _claim_leaf(plan, (x, y, z)):
                    added += 1
    return added


def seal_canopy(plan):
    """ Cap every exposed log top with leaves.

    For each log whose upper neighbour is not a log, the cell above gets
    leaves if it is open air in the live world, within the distance band and
    unclaimed; then so does each of its 26 neighbours under the same test.
    """
    log_keys = set(cell_key(c) for c in plan.logs)
    world = plan.world
    field = plan.field
    added = 0
    for x, y, z in plan.logs:
        above = (x, y + 1, z)
        if cell_key(above) in log_keys:
            continue
        if not is_open_air(world, above) or not _leaf_band(field.get(above)):
            continue
        if _claim_leaf(plan, above):
            added += 1
        for dx, dy, dz in NEIGHBORS_26:
            cell = (above[0] + dx, above[1] + dy, above[2] + dz)
            if not is_open_air(world, cell) or not _leaf_band(field.get(cell)):
                continue
            if _claim_leaf(plan, cell):
                added += 1
    return added
