# standard library imports
import itertools
import numpy

from config import SECTOR_SIZE, SECTOR_HEIGHT
from blocks import AIR, BLOCK_PROTECTED, BLOCK_ID, is_protected
from util import sectorize


class SectorWorld(object):
    '''
    In-memory voxel world made of fixed-size sectors.

    Cells in sectors that were never loaded, or outside the height range,
    read back as None (not generatable).
    '''
    def __init__(self):
        self.sectors = {}

    def load_sector(self, sector_pos, blocks=None):
        if blocks is None:
            blocks = numpy.zeros((SECTOR_SIZE, SECTOR_HEIGHT, SECTOR_SIZE), dtype='u2')
        self.sectors[sector_pos] = blocks
        return blocks

    def load_region(self, min_xz, max_xz, ground_y=None, ground_block=None, fill_block=None):
        """ Load every sector touching the (x, z) rectangle, optionally with
        a flat ground of `fill_block` below `ground_y` topped by `ground_block`.
        """
        if ground_block is None:
            ground_block = BLOCK_ID['Grass']
        if fill_block is None:
            fill_block = BLOCK_ID['Dirt']
        x0, _, z0 = sectorize((min_xz[0], 0, min_xz[1]))
        x1, _, z1 = sectorize((max_xz[0], 0, max_xz[1]))
        for sx, sz in itertools.product(range(x0, x1 + 1, SECTOR_SIZE), range(z0, z1 + 1, SECTOR_SIZE)):
            blocks = self.load_sector((sx, 0, sz))
            if ground_y is not None and 0 < ground_y <= SECTOR_HEIGHT:
                blocks[:, :ground_y - 1, :] = fill_block
                blocks[:, ground_y - 1, :] = ground_block

    def _locate(self, position):
        x, y, z = position
        if y < 0 or y >= SECTOR_HEIGHT:
            return None, None
        sector_pos = sectorize(position)
        blocks = self.sectors.get(sector_pos)
        if blocks is None:
            return None, None
        return blocks, (x - sector_pos[0], y, z - sector_pos[2])

    def get_block(self, position):
        blocks, local = self._locate(position)
        if blocks is None:
            return None
        return int(blocks[local])

    def set_block(self, position, block):
        """ Write `block` at `position`. Protected and unloaded cells are left
        untouched; returns True when the cell was written.
        """
        blocks, local = self._locate(position)
        if blocks is None:
            return False
        if BLOCK_PROTECTED[blocks[local]]:
            return False
        blocks[local] = block
        return True

    def count(self, block):
        return int(sum(numpy.count_nonzero(b == block) for b in self.sectors.values()))

    def positions_of(self, block):
        """ World positions holding `block`, sorted. """
        found = []
        for (sx, _, sz), blocks in self.sectors.items():
            for lx, y, lz in numpy.argwhere(blocks == block):
                found.append((sx + int(lx), int(y), sz + int(lz)))
        return sorted(found)


def is_blocked(world, position):
    """ True if `position` cannot be generated into: not loaded, outside the
    world, or holding a protected block.
    """
    block = world.get_block(position)
    if block is None:
        return True
    return is_protected(block)


def is_open_air(world, position):
    return world.get_block(position) == AIR
