from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from util import cell_key, vec_add, vec_scale

Cell = Tuple[int, int, int]

STATUS_SCHEDULED = 'scheduled'
STATUS_COMPLETED = 'completed'
STATUS_ABORTED = 'aborted'

REASON_OBSTRUCTION = 'obstruction'


class TreeConfigError(ValueError):
    """Raised for option values the generator cannot build from."""


class StructureObstructed(Exception):
    """A trunk or branch cell is blocked; the whole run must stop."""

    def __init__(self, position: Cell):
        super().__init__(f"structure blocked at {position}")
        self.position = position


class Segment(object):
    """One straight branch element. Never mutated after creation."""

    __slots__ = ("start", "direction", "length", "radius", "level")

    def __init__(self, start, direction, length, radius, level):
        self.start = tuple(start)
        self.direction = tuple(direction)
        self.length = float(length)
        self.radius = float(radius)
        self.level = int(level)

    def point_at(self, t):
        return vec_add(self.start, vec_scale(self.direction, t))

    @property
    def end(self):
        return self.point_at(self.length)

    def steps(self, step=1):
        """Sample distances along the segment; the tip is always included."""
        n = int(math.floor(self.length))
        ts = list(range(0, n + 1, max(1, int(step))))
        if ts[-1] < self.length:
            ts.append(self.length)
        return ts

    def __repr__(self):
        return (f"Segment(start={self.start}, direction={self.direction}, "
                f"length={self.length:.2f}, radius={self.radius:.2f}, level={self.level})")


class TreePlan(object):
    """
    Everything decided for one generation run before any block is written:
    the ordered pending writes and the claim set that keeps them unique.
    """

    def __init__(self, world, origin: Cell, seed: int):
        self.world = world
        self.origin = origin
        self.seed = seed
        self.writes: List[Tuple[Cell, int]] = []
        self.claimed = set()
        self.logs: List[Cell] = []
        self.segments: List[Segment] = []
        self.profile = None
        # Added to origin-relative coordinates before noise lookups.
        self.noise_salt = 0
        self.field = None
        self.leaf_count = 0

    def is_claimed(self, cell: Cell) -> bool:
        return cell_key(cell) in self.claimed

    def add(self, cell: Cell, block: int) -> bool:
        """Queue a write unless the cell already has one. First claim wins."""
        key = cell_key(cell)
        if key in self.claimed:
            return False
        self.claimed.add(key)
        self.writes.append((cell, block))
        return True

    def add_log(self, cell: Cell, block: int) -> bool:
        if self.add(cell, block):
            self.logs.append(cell)
            return True
        return False


class GenerationResult(object):
    """Outcome of a generator invocation; updated in place as batches commit."""

    def __init__(self, status: str, seed: int, plan: Optional[TreePlan] = None,
                 reason: Optional[str] = None, position: Optional[Cell] = None):
        self.status = status
        self.seed = seed
        self.plan = plan
        self.reason = reason
        self.position = position
        self.placed = 0
        self.skipped = 0
        self.scheduler = None

    @property
    def done(self) -> bool:
        return self.status != STATUS_SCHEDULED

    def summary(self) -> Dict[str, Any]:
        return {'seed': self.seed, 'placed': self.placed}

    def __repr__(self):
        extra = f" reason={self.reason} at={self.position}" if self.status == STATUS_ABORTED else ""
        return f"GenerationResult({self.status} seed={self.seed} placed={self.placed}{extra})"
