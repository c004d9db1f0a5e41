TICKS_PER_SEC = 20

# Size of sectors used to store blocks.
SECTOR_SIZE = 16 #width and depth (x and z)
SECTOR_HEIGHT = 256 #height of world (y)

# Megatree defaults (callers override per key).
TRUNK_RADIUS = 6
TRUNK_HEIGHT = 32
MAX_BLOCKS_PER_TICK = 500
# Layered growth mode: dome radius and pause between layers (None disables the mode).
CANOPY_RADIUS = 12
STEP_DELAY_MS = None

ROOT_FLARES = True
VINES = True
NOISE_TAPER = True

# Trunk shape
TRUNK_TOP_RATIO = 0.7
# Number of angular taper samples around the trunk and their spread in layers.
TAPER_SAMPLES = 16
TAPER_JITTER = 3.0

# Branch hierarchy
BOUGH_COUNT = (6, 10)
BOUGH_LENGTH = (8, 14)
BOUGH_PITCH = (0.2, 0.35)
BOUGH_YAW_JITTER = 0.15
# Boughs start between this fraction of the trunk height and the top layer.
BOUGH_START = 0.8
BOUGH_RADIUS_SCALE = 0.3
MAX_BRANCH_LEVEL = 2
BRANCH_CONTINUE_CHANCE = 0.6
CHILD_COUNT = (1, 2)
CHILD_POSITION = (0.3, 0.9)
CHILD_LENGTH_SCALE = (0.4, 0.7)
CHILD_RADIUS_SCALE = 0.75
CHILD_UP_BIAS = 0.15

# Root flares and vines
FLARE_COUNT = (3, 5)
FLARE_LENGTH = (2, 4)
FLARE_SIDE_CHANCE = 0.5
VINE_COUNT = (2, 6)
VINE_DRIFT_CHANCE = 0.3
VINE_TOP_RATIO = 0.7

# Canopy
# Cells further than this (26-neighbour steps) from any log never get leaves.
LEAF_MAX_DISTANCE = 6
# Leaf cluster radius per branch level (boughs, limbs, twigs).
LEAF_RADIUS_BY_LEVEL = (5, 4, 3)
# Dense dilation is much faster in numpy; BFS is kept as the reference.
DISTANCE_FIELD_BFS = False

# Sapling growth
SAPLING_GROW_CHANCE = 1.0 / 7
SAPLING_MAX_SOLIDS = 6

# Debug spawn world
DEBUG_GROUND_LEVEL = 64
DEBUG_WORLD_RADIUS = 64

# Enable ANSI colors in logs.
LOG_COLOR = True

# Emit DEBUG level lines.
LOG_DEBUG = False

# Log every committed batch of the placement scheduler.
LOG_SCHEDULER = True
