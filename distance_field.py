#std/external libs
from collections import deque

import numpy

#local libs
import config
from util import NEIGHBORS_26

UNDEFINED = -1


class DistanceField(object):
    '''
    26-neighbour step distance from the nearest log cell, stored densely over
    the log bounding box padded by the maximum distance.
    '''
    def __init__(self, lo, grid):
        self.lo = lo
        self.grid = grid

    @property
    def shape(self):
        return self.grid.shape

    def _index(self, cell):
        i = cell[0] - self.lo[0]
        j = cell[1] - self.lo[1]
        k = cell[2] - self.lo[2]
        sx, sy, sz = self.grid.shape
        if 0 <= i < sx and 0 <= j < sy and 0 <= k < sz:
            return i, j, k
        return None

    def get(self, cell):
        idx = self._index(cell)
        if idx is None:
            return None
        d = int(self.grid[idx])
        return None if d == UNDEFINED else d

    def lookup(self, cells):
        """ Vectorised `get` for an (N, 3) int array; undefined cells give -1. """
        local = numpy.asarray(cells) - numpy.asarray(self.lo)
        shape = numpy.asarray(self.grid.shape)
        inside = numpy.all((local >= 0) & (local < shape), axis=1)
        out = numpy.full(len(local), UNDEFINED, dtype=numpy.int16)
        sel = local[inside]
        out[inside] = self.grid[sel[:, 0], sel[:, 1], sel[:, 2]]
        return out

    def __contains__(self, cell):
        return self.get(cell) is not None

    def count_defined(self):
        return int(numpy.count_nonzero(self.grid != UNDEFINED))


def _bounds(logs, pad):
    arr = numpy.asarray(logs, dtype=numpy.int64)
    lo = arr.min(axis=0) - pad
    hi = arr.max(axis=0) + pad
    return arr, tuple(int(v) for v in lo), tuple(int(v) for v in hi - lo + 1)


def _relax_bfs(grid, sources, max_distance):
    queue = deque(sources)
    shape = grid.shape
    while queue:
        i, j, k = queue.popleft()
        d = grid[i, j, k]
        if d >= max_distance:
            continue
        nd = d + 1
        for di, dj, dk in NEIGHBORS_26:
            ni, nj, nk = i + di, j + dj, k + dk
            if ni < 0 or nj < 0 or nk < 0 or ni >= shape[0] or nj >= shape[1] or nk >= shape[2]:
                continue
            if grid[ni, nj, nk] != UNDEFINED:
                continue
            grid[ni, nj, nk] = nd
            queue.append((ni, nj, nk))
    return grid


def _relax_dense(grid, max_distance):
    reached = grid != UNDEFINED
    for d in range(1, max_distance + 1):
        # One 3x3x3 dilation per step: separable max along each axis.
        grown = reached.copy()
        for axis in range(3):
            shifted = grown.copy()
            lo = [slice(None)] * 3
            hi = [slice(None)] * 3
            lo[axis] = slice(1, None)
            hi[axis] = slice(None, -1)
            shifted[tuple(lo)] |= grown[tuple(hi)]
            shifted[tuple(hi)] |= grown[tuple(lo)]
            grown = shifted
        frontier = grown & ~reached
        if not numpy.any(frontier):
            break
        grid[frontier] = d
        reached = grown
    return grid


def build_distance_field(logs, max_distance=None, use_bfs=None):
    """ Multi-source distance field seeded from every cell in `logs`.

    Both strategies give identical values: the BFS expands in FIFO order and
    stops expanding at `max_distance`; the dense strategy dilates the source
    mask `max_distance` times.
    """
    if max_distance is None:
        max_distance = config.LEAF_MAX_DISTANCE
    if use_bfs is None:
        use_bfs = bool(getattr(config, "DISTANCE_FIELD_BFS", False))
    if len(logs) == 0:
        return DistanceField((0, 0, 0), numpy.full((0, 0, 0), UNDEFINED, dtype=numpy.int8))
    arr, lo, shape = _bounds(logs, max_distance)
    grid = numpy.full(shape, UNDEFINED, dtype=numpy.int8)
    local = arr - numpy.asarray(lo)
    grid[local[:, 0], local[:, 1], local[:, 2]] = 0
    if use_bfs:
        # Sources in first-seen order, duplicates dropped.
        seen = set()
        sources = []
        for i, j, k in local.tolist():
            if (i, j, k) not in seen:
                seen.add((i, j, k))
                sources.append((i, j, k))
        _relax_bfs(grid, sources, max_distance)
    else:
        _relax_dense(grid, max_distance)
    return DistanceField(lo, grid)
