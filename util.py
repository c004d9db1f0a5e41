import math
import itertools

from config import SECTOR_SIZE

# Full 3x3x3 neighbourhood minus the centre, in a fixed order.
NEIGHBORS_26 = tuple(
    off for off in itertools.product((-1, 0, 1), repeat=3) if off != (0, 0, 0)
)

# Packed cell key layout: 21 bits per axis, biased so negatives pack as positives.
# x occupies bits 42..62, y bits 21..41, z bits 0..20.
KEY_BITS = 21
KEY_BIAS = 1 << (KEY_BITS - 1)


def normalize(position):
    """ Accepts `position` of arbitrary precision and returns the block
    containing that position.

    Parameters
    ----------
    position : tuple of len 3

    Returns
    -------
    block_position : tuple of ints of len 3

    """
    x, y, z = position
    x, y, z = (int(round(x)), int(round(y)), int(round(z)))
    return (x, y, z)


def sectorize(position):
    """ Returns a tuple representing the sector for the given `position`.

    Parameters
    ----------
    position : tuple of len 3

    Returns
    -------
    sector : tuple of len 3

    """
    x, y, z = normalize(position)
    x, y, z = x // SECTOR_SIZE, y // SECTOR_SIZE, z // SECTOR_SIZE
    return (x*SECTOR_SIZE, 0, z*SECTOR_SIZE)


def cell_key(cell):
    """ Pack an integer cell into a single int; equal keys iff equal cells. """
    x, y, z = cell
    return ((x + KEY_BIAS) << (2 * KEY_BITS)) | ((y + KEY_BIAS) << KEY_BITS) | (z + KEY_BIAS)


def vec_add(a, b):
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_scale(a, s):
    return (a[0] * s, a[1] * s, a[2] * s)


def vec_length(a):
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def vec_normalize(a):
    length = vec_length(a)
    if length == 0:
        return (0.0, 1.0, 0.0)
    return (a[0] / length, a[1] / length, a[2] / length)


def dominant_axis(direction):
    """ Index of the largest |component|; ties resolve to y (vertical). """
    ax, ay, az = (abs(c) for c in direction)
    if ay >= ax and ay >= az:
        return 1
    return 0 if ax >= az else 2
