"""Commit pending block writes to the world a bounded batch per host turn."""

import time

import pyglet

import config
import logutil
from tree_plan import STATUS_COMPLETED
from world import is_blocked

IDLE = 'idle'
BATCHING = 'batching'
DONE = 'done'


class PygletClock(object):
    '''
    Turn scheduler backed by pyglet's clock. `schedule_next` runs one tick
    out; `schedule_after` waits the given delay, never less than one tick.
    A zero delay would run inside the tick that scheduled it.
    '''
    def __init__(self, clock=None):
        self.clock = clock if clock is not None else pyglet.clock
        self.tick_interval = 1.0 / config.TICKS_PER_SEC

    def schedule_next(self, fn):
        self.clock.schedule_once(lambda dt: fn(), self.tick_interval)

    def schedule_after(self, fn, delay_ms):
        self.clock.schedule_once(lambda dt: fn(), max(self.tick_interval, delay_ms / 1000.0))


def commit_writes(world, writes):
    """ Write each (position, block) that is still unobstructed; returns
    (placed, skipped).
    """
    placed = 0
    skipped = 0
    for position, block in writes:
        if is_blocked(world, position) or not world.set_block(position, block):
            skipped += 1
            continue
        placed += 1
    return placed, skipped


class PlacementScheduler(object):
    '''
    Batches an ordered list of (position, block) writes across turns.

    States: idle -> batching -> done. Each `advance` handles at most
    `batch_size` writes from the cursor, re-checking obstruction at commit
    time and skipping cells that became blocked since they were decided.
    '''
    def __init__(self, world, writes, batch_size, clock=None, on_complete=None, result=None, seed=None):
        self.world = world
        self.writes = writes
        self.batch_size = batch_size
        self.clock = clock if clock is not None else PygletClock()
        self.on_complete = on_complete
        self.result = result
        self.seed = seed if seed is not None else getattr(result, 'seed', None)
        self.state = IDLE
        self.cursor = 0
        self.turns = 0
        self.placed = 0
        self.skipped = 0
        self.batch_sizes = []

    @property
    def remaining(self):
        return len(self.writes) - self.cursor

    def start(self):
        if self.state != IDLE:
            return
        self.state = BATCHING
        self.clock.schedule_next(self.advance)

    def advance(self):
        """ Commit one batch; returns the number of writes handled. """
        if self.state == DONE:
            return 0
        self.state = BATCHING
        self.turns += 1
        logutil.set_tick(self.turns)
        start = time.perf_counter()
        limit = min(len(self.writes), self.cursor + self.batch_size)
        handled = limit - self.cursor
        placed, skipped = commit_writes(self.world, self.writes[self.cursor:limit])
        self.placed += placed
        self.skipped += skipped
        self.cursor = limit
        self.batch_sizes.append(handled)
        logutil.log(
            "SCHED",
            f"batch {self.turns} wrote {handled} ({self.remaining} left) in {(time.perf_counter() - start) * 1000.0:.2f}ms",
        )
        if self.cursor < len(self.writes):
            self.clock.schedule_next(self.advance)
        else:
            self._finish()
        return handled

    def _finish(self):
        self.state = DONE
        logutil.set_tick(None)
        if self.result is not None:
            self.result.status = STATUS_COMPLETED
            self.result.placed = self.placed
            self.result.skipped = self.skipped
        logutil.log("TREE", f"seed={self.seed} placed={self.placed} skipped={self.skipped} turns={self.turns}")
        if self.on_complete is not None:
            self.on_complete({'seed': self.seed, 'placed': self.placed})
