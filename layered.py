#std/external libs
import math

#local libs
import logutil
from blocks import BLOCK_ID
from hashnoise import hash_noise
from rng import TreeRNG
from scheduler import PygletClock, commit_writes
from skeleton import build_trunk_layer, make_profile
from tree_plan import (
    REASON_OBSTRUCTION,
    STATUS_ABORTED,
    STATUS_COMPLETED,
    STATUS_SCHEDULED,
    GenerationResult,
    StructureObstructed,
    TreePlan,
)
from util import normalize
from world import is_blocked

LEAVES = BLOCK_ID['Oak Leaves']
TRUNK = 'trunk'
DOME = 'dome'


class LayeredGrowth(object):
    '''
    Grows a simple tree one horizontal layer per step: the tapered trunk,
    then an oblate leaf dome. Each layer is decided right before it is
    committed, so an obstruction part way up leaves the lower layers in place.
    '''
    def __init__(self, world, origin, options, clock=None, result=None):
        self.world = world
        self.plan = TreePlan(world, normalize(origin), options['seed'])
        rng = TreeRNG(options['seed'])
        self.plan.noise_salt = rng.int(0, 0xFFFF)
        self.profile = make_profile(
            options['trunk_radius'],
            options['trunk_height'],
            noise_taper=options['noise_taper'],
            salt=self.plan.noise_salt,
        )
        self.plan.profile = self.profile
        self.canopy_radius = options['canopy_radius']
        self.radius_y = max(1, int(round(self.canopy_radius * 0.5)))
        # Dome centre relative to the origin; the dome's lower edge meets the trunk top.
        self.center_y = options['trunk_height'] - 2 + self.radius_y
        self.layers = [(TRUNK, y) for y in range(options['trunk_height'])]
        self.layers += [(DOME, dy) for dy in range(-self.radius_y, self.radius_y + 1)]
        self.batch_size = options['max_blocks_per_tick']
        self.delay_ms = options['step_delay_ms'] or 0
        self.clock = clock if clock is not None else PygletClock()
        self.on_complete = options['on_complete']
        self.result = result
        self.layer_index = 0
        self.pending = []
        self.cursor = 0
        self.turns = 0
        self.placed = 0
        self.skipped = 0
        self.done = False

    def start(self):
        self.clock.schedule_next(self.step)

    def _dome_layer(self, dy):
        plan = self.plan
        ox, oy, oz = plan.origin
        salt = plan.noise_salt
        frac = dy / float(self.radius_y)
        radius_at = int(round(math.sqrt(max(0.0, 1.0 - frac * frac)) * self.canopy_radius))
        y = oy + self.center_y + dy
        for dx in range(-radius_at, radius_at + 1):
            for dz in range(-radius_at, radius_at + 1):
                r = radius_at + math.floor(hash_noise(dx + salt, dy, dz - salt) * 4 - 2)
                if math.sqrt(dx * dx + dz * dz) > r:
                    continue
                # Thin out the underside.
                if dy < 0 and hash_noise(dx + salt + 10, dy + 10, dz - salt + 10) > 0.6:
                    continue
                cell = (ox + dx, y, oz + dz)
                if plan.is_claimed(cell) or is_blocked(self.world, cell):
                    continue
                plan.add(cell, LEAVES)

    def _next_layer(self):
        kind, y = self.layers[self.layer_index]
        self.layer_index += 1
        mark = len(self.plan.writes)
        if kind == TRUNK:
            build_trunk_layer(self.plan, self.profile, y)
        else:
            self._dome_layer(y)
        self.pending = self.plan.writes[mark:]
        self.cursor = 0

    def step(self):
        if self.done:
            return
        self.turns += 1
        logutil.set_tick(self.turns)
        if self.cursor >= len(self.pending):
            if self.layer_index >= len(self.layers):
                self._finish()
                return
            try:
                self._next_layer()
            except StructureObstructed as e:
                self._abort(e.position)
                return
        limit = min(len(self.pending), self.cursor + self.batch_size)
        placed, skipped = commit_writes(self.world, self.pending[self.cursor:limit])
        self.placed += placed
        self.skipped += skipped
        self.cursor = limit
        if self.cursor < len(self.pending):
            self.clock.schedule_next(self.step)
        elif self.layer_index < len(self.layers):
            self.clock.schedule_after(self.step, self.delay_ms)
        else:
            self._finish()

    def _abort(self, position):
        self.done = True
        logutil.set_tick(None)
        logutil.log("TREE", f"seed={self.plan.seed} layered growth blocked at {position} after {self.placed} blocks", level="WARN")
        if self.result is not None:
            self.result.status = STATUS_ABORTED
            self.result.reason = REASON_OBSTRUCTION
            self.result.position = position
            self.result.placed = self.placed
            self.result.skipped = self.skipped

    def _finish(self):
        self.done = True
        logutil.set_tick(None)
        if self.result is not None:
            self.result.status = STATUS_COMPLETED
            self.result.placed = self.placed
            self.result.skipped = self.skipped
        logutil.log("TREE", f"seed={self.plan.seed} layered placed={self.placed} layers={len(self.layers)} turns={self.turns}")
        if self.on_complete is not None:
            self.on_complete({'seed': self.plan.seed, 'placed': self.placed})


def generate_layered(world, origin, options, clock=None):
    """ Start layered growth with already-resolved `options`. """
    result = GenerationResult(STATUS_SCHEDULED, options['seed'])
    growth = LayeredGrowth(world, origin, options, clock=clock, result=result)
    result.plan = growth.plan
    result.scheduler = growth
    growth.start()
    return result
