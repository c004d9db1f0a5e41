#
# Hashed integer noise for silhouette jitter.
#
# Unlike gradient noise there is no table and no smoothing: every integer
# lattice point hashes independently to a value in [0, 1). Both functions
# below produce identical values for identical inputs.
#
import numpy

H_X = 374761393
H_Y = 668265263
H_Z = 2147483647
H_MIX = 1274126177
MASK32 = 0xFFFFFFFF
SCALE = 1.0 / 4294967296.0


def hash_noise(x, y, z):
    h = (int(x) * H_X + int(y) * H_Y + int(z) * H_Z) & MASK32
    h ^= h >> 13
    h = (h * H_MIX) & MASK32
    return h * SCALE


def hash_noise_array(x, y, z):
    # Work in uint64: products wrap mod 2**64, which agrees with exact
    # arithmetic once masked to 32 bits.
    x = numpy.atleast_1d(numpy.asarray(x, dtype=numpy.int64)).astype(numpy.uint64)
    y = numpy.atleast_1d(numpy.asarray(y, dtype=numpy.int64)).astype(numpy.uint64)
    z = numpy.atleast_1d(numpy.asarray(z, dtype=numpy.int64)).astype(numpy.uint64)
    mask = numpy.uint64(MASK32)
    h = (x * numpy.uint64(H_X) + y * numpy.uint64(H_Y) + z * numpy.uint64(H_Z)) & mask
    h ^= h >> numpy.uint64(13)
    h = (h * numpy.uint64(H_MIX)) & mask
    return h.astype(numpy.float64) * SCALE
