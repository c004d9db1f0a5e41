import numpy


class Block(object):
    name = None
    # Generation must never overwrite these nor treat them as free space.
    protected = False
    # Soft blocks do not count against the sapling growth space check.
    soft = False

class Decoration(object):
    soft = True

class DirtWithGrass(Block):
    name = 'Grass'
    soft = True

class Dirt(Block):
    name = 'Dirt'

class Stone(Block):
    name = 'Stone'

class Sand(Block):
    name = 'Sand'

class OakLog(Block):
    name = 'Oak Log'

class OakLogX(OakLog):
    name = 'Oak Log X'

class OakLogZ(OakLog):
    name = 'Oak Log Z'

class StrippedOakLog(Block):
    name = 'Stripped Oak Log'

class OakLeaves(Block):
    name = 'Oak Leaves'
    soft = True

class Vine(Block):
    name = 'Vine'

class VineSouth(Vine):
    name = 'Vine South'

class VineWest(Vine):
    name = 'Vine West'

class VineNorth(Vine):
    name = 'Vine North'

class VineEast(Vine):
    name = 'Vine East'

class TallGrass(Decoration, Block):
    name = 'Tall Grass'

class Flower(Decoration, Block):
    name = 'Flower'

class ElderOakSapling(Block):
    name = 'Elder Oak Sapling'

class Chest(Block):
    name = 'Chest'
    protected = True

class TrappedChest(Chest):
    name = 'Trapped Chest'

class EnderChest(Chest):
    name = 'Ender Chest'

class ShulkerBox(Chest):
    name = 'Shulker Box'

class Barrel(Chest):
    name = 'Barrel'

class Beacon(Block):
    name = 'Beacon'
    protected = True

class CommandBlock(Block):
    name = 'Command Block'
    protected = True

class RepeatingCommandBlock(CommandBlock):
    name = 'Repeating Command Block'

class ChainCommandBlock(CommandBlock):
    name = 'Chain Command Block'

class Bedrock(Block):
    name = 'Bedrock'
    protected = True

class NetherPortal(Block):
    name = 'Nether Portal'
    protected = True

class EndPortal(NetherPortal):
    name = 'End Portal'

class EndGateway(NetherPortal):
    name = 'End Gateway'


BLOCKS = [
    DirtWithGrass,
    Dirt,
    Stone,
    Sand,
    OakLog,
    OakLogX,
    OakLogZ,
    StrippedOakLog,
    OakLeaves,
    Vine,
    VineSouth,
    VineWest,
    VineNorth,
    VineEast,
    TallGrass,
    Flower,
    ElderOakSapling,
    Chest,
    TrappedChest,
    EnderChest,
    ShulkerBox,
    Barrel,
    Beacon,
    CommandBlock,
    RepeatingCommandBlock,
    ChainCommandBlock,
    Bedrock,
    NetherPortal,
    EndPortal,
    EndGateway,
]
# Id 0 is air.
AIR = 0
i = 1
BLOCK_ID = {}
for x in BLOCKS:
    BLOCK_ID[x.name] = i
    i+=1
BLOCK_NAME = dict((v, k) for k, v in BLOCK_ID.items())
BLOCK_NAME[AIR] = 'Air'
BLOCK_PROTECTED = numpy.array([False]+[x.protected for x in BLOCKS], dtype = numpy.uint8)
BLOCK_SOFT = numpy.array([True]+[getattr(x, 'soft', False) for x in BLOCKS], dtype = numpy.uint8)
PROTECTED_BLOCK_IDS = frozenset(i for i in range(len(BLOCKS) + 1) if BLOCK_PROTECTED[i])

# Orientation indices (XZ around Y).
ORIENT_SOUTH = 0  # +Z
ORIENT_WEST = 1   # -X
ORIENT_NORTH = 2  # -Z
ORIENT_EAST = 3   # +X

# Unit step in (x, z) for each orientation index.
ORIENT_STEP = {
    ORIENT_SOUTH: (0, 1),
    ORIENT_WEST: (-1, 0),
    ORIENT_NORTH: (0, -1),
    ORIENT_EAST: (1, 0),
}

ORIENTED_BLOCK_IDS = {}

def _register_oriented(base_name, south, west, north, east):
    base_id = BLOCK_ID[base_name]
    ORIENTED_BLOCK_IDS[base_id] = [
        BLOCK_ID[south],
        BLOCK_ID[west],
        BLOCK_ID[north],
        BLOCK_ID[east],
    ]

# A vine variant names the trunk face it hangs on.
_register_oriented('Vine', 'Vine South', 'Vine West', 'Vine North', 'Vine East')

# Log pillar axis variants, indexed by axis (0=x, 1=y, 2=z).
LOG_AXIS_IDS = (BLOCK_ID['Oak Log X'], BLOCK_ID['Oak Log'], BLOCK_ID['Oak Log Z'])


def oriented(base_id, orient):
    return ORIENTED_BLOCK_IDS[base_id][orient]


def is_protected(block):
    return block is not None and bool(BLOCK_PROTECTED[block])
