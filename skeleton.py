#std/external libs
import math
from collections import deque
from functools import lru_cache

import numpy

#local libs
import config
from blocks import BLOCK_ID, LOG_AXIS_IDS, ORIENT_STEP, oriented
from hashnoise import hash_noise
from tree_plan import Segment, StructureObstructed
from util import normalize, dominant_axis, vec_add, vec_normalize
from world import is_blocked

OUTER_LOG = BLOCK_ID['Oak Log']
INNER_LOG = BLOCK_ID['Stripped Oak Log']
VINE = BLOCK_ID['Vine']


class TrunkProfile(object):
    """Tapered trunk cross-sections, one column grid shared by all layers."""

    def __init__(self, radius, height, taper_offsets=None):
        self.radius = radius
        self.height = height
        self.top_radius = max(1, int(math.floor(radius * config.TRUNK_TOP_RATIO)))
        self.taper_offsets = taper_offsets
        dx, dz = numpy.mgrid[-radius:radius + 1, -radius:radius + 1]
        self.dx = dx.ravel()
        self.dz = dz.ravel()
        self.d2 = self.dx * self.dx + self.dz * self.dz
        if taper_offsets is None:
            self.col_offset = numpy.zeros(self.d2.shape, dtype=float)
        else:
            samples = len(taper_offsets)
            angle = numpy.arctan2(self.dz, self.dx) + math.pi
            bucket = (angle / (2 * math.pi) * samples).astype(int) % samples
            self.col_offset = numpy.asarray(taper_offsets, dtype=float)[bucket]

    def nominal_radius(self, y):
        t = min(1.0, max(0.0, y / float(self.height)))
        return int(round(self.radius + (self.top_radius - self.radius) * t))

    def layer_radii(self, y):
        t = numpy.clip((y + self.col_offset) / float(self.height), 0.0, 1.0)
        return numpy.round(self.radius + (self.top_radius - self.radius) * t)

    def layer(self, y):
        """ Trunk columns of layer `y` as (dx, dz, outer) in dx, dz order. """
        r = self.layer_radii(y)
        inside = self.d2 <= r * r
        outer = (self.d2 >= (r - 1) * (r - 1)) | (r <= 1)
        return [(int(self.dx[i]), int(self.dz[i]), bool(outer[i])) for i in numpy.nonzero(inside)[0]]


def make_profile(radius, height, noise_taper=True, salt=0):
    offsets = None
    if noise_taper:
        jitter = config.TAPER_JITTER
        offsets = [(hash_noise(i, salt, 7) - 0.5) * 2 * jitter for i in range(config.TAPER_SAMPLES)]
    return TrunkProfile(radius, height, offsets)


def _place_structural(plan, cell, block):
    if plan.is_claimed(cell):
        return False
    if is_blocked(plan.world, cell):
        raise StructureObstructed(cell)
    return plan.add_log(cell, block)


def _place_optional(plan, cell, block, log=False):
    if plan.is_claimed(cell) or is_blocked(plan.world, cell):
        return False
    if log:
        return plan.add_log(cell, block)
    return plan.add(cell, block)


def build_trunk_layer(plan, profile, y):
    ox, oy, oz = plan.origin
    for dx, dz, outer in profile.layer(y):
        _place_structural(plan, (ox + dx, oy + y, oz + dz), OUTER_LOG if outer else INNER_LOG)


def build_trunk(plan, profile):
    for y in range(profile.height):
        build_trunk_layer(plan, profile, y)


def build_root_flares(plan, rng, profile):
    ox, oy, oz = plan.origin
    base_r = max(1, profile.radius // 3)
    for _ in range(rng.int(*config.FLARE_COUNT)):
        yaw = rng.range(0, 2 * math.pi)
        ux, uz = math.cos(yaw), math.sin(yaw)
        length = rng.int(*config.FLARE_LENGTH)
        fr = base_r
        for i in range(1, length + 1):
            fr = max(1, int(round(base_r * (1 - (i - 1) / float(length)))))
            reach = profile.radius - 1 + i
            cx, _, cz = normalize((ox + ux * reach, oy, oz + uz * reach))
            # Half-sphere mound sitting on the base layer.
            for ax, ay, az in _sphere_offsets(fr):
                if ay < 0:
                    continue
                _place_optional(plan, (cx + ax, oy + ay, cz + az), OUTER_LOG, log=True)
        if rng.chance(config.FLARE_SIDE_CHANCE):
            side = rng.choice((-1, 1))
            reach = profile.radius - 1 + length
            tip = (ox + ux * reach - uz * side * (fr + 1), oy, oz + uz * reach + ux * side * (fr + 1))
            _place_optional(plan, normalize(tip), OUTER_LOG, log=True)


def _face_cell(plan, y, step, tangent, offset, limit):
    """ First unclaimed cell walking out from the axis along a trunk face. """
    ox, oy, oz = plan.origin
    for d in range(limit):
        cell = (ox + step[0] * d + tangent[0] * offset, oy + y, oz + step[1] * d + tangent[1] * offset)
        if not plan.is_claimed(cell):
            return cell
    return None


def build_vines(plan, rng, profile):
    height = profile.height
    limit = profile.radius + 3
    for _ in range(rng.int(*config.VINE_COUNT)):
        orient = rng.int(0, 3)
        step = ORIENT_STEP[orient]
        tangent = (-step[1], step[0])
        block = oriented(VINE, orient)
        y = rng.int(0, 2)
        top = min(height - 1, y + rng.int(height // 3, int(height * config.VINE_TOP_RATIO)))
        offset = rng.int(-1, 1)
        while y <= top:
            bound = max(0, profile.nominal_radius(y) - 1)
            offset = max(-bound, min(bound, offset))
            cell = _face_cell(plan, y, step, tangent, offset, limit)
            if cell is not None:
                _place_optional(plan, cell, block)
            if rng.chance(config.VINE_DRIFT_CHANCE):
                offset += rng.choice((-1, 1))
            y += 1


def _spawn_child(rng, parent):
    level = parent.level + 1
    start = parent.point_at(rng.range(*config.CHILD_POSITION) * parent.length)
    jitter = (
        rng.range(-0.5, 0.5),
        rng.range(0.1, 0.3) + config.CHILD_UP_BIAS * level,
        rng.range(-0.5, 0.5),
    )
    direction = vec_normalize(vec_add(parent.direction, jitter))
    length = max(2.0, parent.length * rng.range(*config.CHILD_LENGTH_SCALE))
    radius = max(1.0, parent.radius * config.CHILD_RADIUS_SCALE)
    return Segment(start, direction, length, radius, level)


def grow_branches(rng, origin, profile):
    """ Boughs around the trunk top plus their children, as a flat list.

    Children come off an explicit FIFO work list capped at
    `config.MAX_BRANCH_LEVEL`, so the list is finite and its order is fixed
    by the seed.
    """
    ox, oy, oz = origin
    height = profile.height
    count = rng.int(*config.BOUGH_COUNT)
    radius = max(1.0, profile.radius * config.BOUGH_RADIUS_SCALE)
    jitter = config.BOUGH_YAW_JITTER
    segments = []
    for i in range(count):
        yaw = i / float(count) * 2 * math.pi + rng.range(-jitter, jitter)
        y = rng.int(int(height * config.BOUGH_START), height - 1)
        pitch = rng.range(*config.BOUGH_PITCH)
        flat = math.sqrt(1.0 - pitch * pitch)
        direction = (math.cos(yaw) * flat, pitch, math.sin(yaw) * flat)
        out = profile.nominal_radius(y) * 0.5
        start = (ox + math.cos(yaw) * out, oy + y, oz + math.sin(yaw) * out)
        length = rng.int(*config.BOUGH_LENGTH)
        segments.append(Segment(start, direction, length, radius, 0))

    work = deque(segments)
    while work:
        parent = work.popleft()
        if parent.level >= config.MAX_BRANCH_LEVEL:
            continue
        if parent.level > 0 and not rng.chance(config.BRANCH_CONTINUE_CHANCE):
            continue
        for _ in range(rng.int(*config.CHILD_COUNT)):
            child = _spawn_child(rng, parent)
            segments.append(child)
            work.append(child)
    return segments


@lru_cache(maxsize=64)
def _sphere_offsets(radius):
    reach = int(math.ceil(radius))
    d = numpy.mgrid[-reach:reach + 1, -reach:reach + 1, -reach:reach + 1].reshape(3, -1).T
    keep = (d * d).sum(axis=1) <= radius * radius
    return tuple((int(a), int(b), int(c)) for a, b, c in d[keep])


def place_segment(plan, segment):
    """ Voxelise a segment as unit-spaced spheres of its radius. """
    block = LOG_AXIS_IDS[dominant_axis(segment.direction)]
    offsets = _sphere_offsets(segment.radius)
    for t in segment.steps():
        cx, cy, cz = normalize(segment.point_at(t))
        for ax, ay, az in offsets:
            _place_structural(plan, (cx + ax, cy + ay, cz + az), block)


def build_skeleton(plan, rng, options):
    """ Trunk, flares, branches and vines, in that write order.

    Raises StructureObstructed on the first blocked trunk or branch cell.
    """
    profile = make_profile(
        options['trunk_radius'],
        options['trunk_height'],
        noise_taper=options['noise_taper'],
        salt=plan.noise_salt,
    )
    plan.profile = profile
    build_trunk(plan, profile)
    if options['root_flares']:
        build_root_flares(plan, rng, profile)
    segments = grow_branches(rng, plan.origin, profile)
    for segment in segments:
        place_segment(plan, segment)
    plan.segments = segments
    if options['vines']:
        build_vines(plan, rng, profile)
    return profile
