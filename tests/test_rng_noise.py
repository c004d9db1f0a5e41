import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hashnoise import hash_noise, hash_noise_array
from rng import TreeRNG


def test_rng_first_step_from_zero_seed():
    rng = TreeRNG(0)
    value = rng.next()
    assert rng.state == 1013904223
    assert value == 1013904223 / 4294967296.0


def test_rng_same_seed_same_sequence():
    a = TreeRNG(42)
    b = TreeRNG(42)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]
    c = TreeRNG(43)
    assert [TreeRNG(42).next() for _ in range(3)] != [c.next() for _ in range(3)]


def test_rng_seed_wraps_to_32_bits():
    assert TreeRNG(2 ** 32 + 5).state == 5


def test_rng_int_is_closed_interval():
    rng = TreeRNG(7)
    seen = set(rng.int(3, 5) for _ in range(500))
    assert seen == {3, 4, 5}


def test_rng_range_and_chance_bounds():
    rng = TreeRNG(99)
    for _ in range(500):
        v = rng.range(-2.0, 3.0)
        assert -2.0 <= v < 3.0
    assert not any(rng.chance(0.0) for _ in range(100))
    assert all(rng.chance(1.0) for _ in range(100))


def test_rng_choice_picks_members():
    rng = TreeRNG(1)
    picks = set(rng.choice((-1, 1)) for _ in range(200))
    assert picks == {-1, 1}


def test_hash_noise_origin_is_zero():
    assert hash_noise(0, 0, 0) == 0.0


def test_hash_noise_range_and_determinism():
    values = [hash_noise(x, y, z) for x in range(-5, 6) for y in range(-3, 4) for z in (-1000, 0, 77)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert values == [hash_noise(x, y, z) for x in range(-5, 6) for y in range(-3, 4) for z in (-1000, 0, 77)]
    assert len(set(values)) > len(values) // 2


def test_hash_noise_array_matches_scalar():
    xs, ys, zs = np.mgrid[-20:21:3, -7:8:2, -40000:40001:9999]
    xs, ys, zs = xs.ravel(), ys.ravel(), zs.ravel()
    got = hash_noise_array(xs, ys, zs)
    expected = np.array([hash_noise(x, y, z) for x, y, z in zip(xs, ys, zs)])
    assert np.array_equal(got, expected)


def test_hash_noise_array_accepts_scalars():
    got = hash_noise_array(12, -3, 65535)
    assert got.shape == (1,)
    assert got[0] == hash_noise(12, -3, 65535)
