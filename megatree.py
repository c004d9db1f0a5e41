"""Megatree generator entry point.

`generate` runs the whole decision phase synchronously (skeleton, distance
field, canopy, sealing) into a `TreePlan`, then hands the ordered writes to a
`PlacementScheduler` that commits them a bounded batch per host turn.

A blocked trunk or branch cell aborts the run before anything is written; the
caller gets an aborted `GenerationResult` naming the position instead of a
silently missing tree.
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import config
import logutil
from blocks import BLOCK_NAME
from canopy import build_canopy, seal_canopy
from distance_field import build_distance_field
from layered import generate_layered
from rng import TreeRNG
from scheduler import PlacementScheduler
from skeleton import build_skeleton
from tree_plan import (
    REASON_OBSTRUCTION,
    STATUS_ABORTED,
    STATUS_SCHEDULED,
    GenerationResult,
    StructureObstructed,
    TreeConfigError,
    TreePlan,
)
from util import normalize

SEED_MASK = 0xFFFFFFFF


def default_options() -> Dict[str, Any]:
    return {
        'seed': None,
        'trunk_radius': config.TRUNK_RADIUS,
        'trunk_height': config.TRUNK_HEIGHT,
        'max_blocks_per_tick': config.MAX_BLOCKS_PER_TICK,
        'on_complete': None,
        'canopy_radius': config.CANOPY_RADIUS,
        'step_delay_ms': config.STEP_DELAY_MS,
        'root_flares': config.ROOT_FLARES,
        'vines': config.VINES,
        'noise_taper': config.NOISE_TAPER,
    }


def _require_int(options, key, minimum):
    value = options[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TreeConfigError(f"{key} must be an integer, got {value!r}")
    if value < minimum:
        raise TreeConfigError(f"{key} must be >= {minimum}, got {value}")


def resolve_options(options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """ Shallow-merge `options` over the defaults and validate the result.

    Unknown keys are dropped with a warning; None values fall back to the
    default for that key.
    """
    merged = default_options()
    for key, value in (options or {}).items():
        if key not in merged:
            logutil.log("TREE", f"ignoring unknown option {key!r}", level="WARN")
            continue
        if value is not None:
            merged[key] = value

    if merged['seed'] is None:
        merged['seed'] = int(time.time() * 1000) % 2147483647
    _require_int(merged, 'seed', 0)
    merged['seed'] &= SEED_MASK
    _require_int(merged, 'trunk_radius', 1)
    _require_int(merged, 'trunk_height', 4)
    _require_int(merged, 'max_blocks_per_tick', 1)
    _require_int(merged, 'canopy_radius', 1)
    delay = merged['step_delay_ms']
    if delay is not None:
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise TreeConfigError(f"step_delay_ms must be a non-negative number, got {delay!r}")
    if merged['on_complete'] is not None and not callable(merged['on_complete']):
        raise TreeConfigError("on_complete must be callable")
    return merged


def plan_tree(world, origin, options=None) -> TreePlan:
    """ Decide every write for one tree without touching the world.

    Raises StructureObstructed when a trunk or branch cell is blocked.
    """
    options = resolve_options(options)
    start = time.perf_counter()
    plan = TreePlan(world, normalize(origin), options['seed'])
    rng = TreeRNG(options['seed'])
    plan.noise_salt = rng.int(0, 0xFFFF)
    build_skeleton(plan, rng, options)
    plan.field = build_distance_field(plan.logs)
    canopy = build_canopy(plan)
    sealed = seal_canopy(plan)
    logutil.log(
        "TREE",
        f"seed={plan.seed} logs={len(plan.logs)} segments={len(plan.segments)} "
        f"field={plan.field.count_defined()} leaves={canopy}+{sealed} writes={len(plan.writes)} "
        f"in {(time.perf_counter() - start) * 1000.0:.1f}ms",
    )
    return plan


def generate(world, origin, options=None, clock=None) -> GenerationResult:
    """ Grow a megatree at `origin`.

    Returns a GenerationResult: `aborted` if the structure hit a blocked
    cell, otherwise `scheduled`, becoming `completed` once the last batch
    commits (at which point `on_complete({'seed', 'placed'})` is called).
    Setting `step_delay_ms` selects the simpler layer-by-layer mode.
    """
    options = resolve_options(options)
    if options['step_delay_ms'] is not None:
        return generate_layered(world, origin, options, clock=clock)

    try:
        plan = plan_tree(world, origin, options)
    except StructureObstructed as e:
        what = BLOCK_NAME.get(world.get_block(e.position), 'unloaded')
        logutil.log("TREE", f"seed={options['seed']} aborted: {e} ({what})", level="WARN")
        return GenerationResult(STATUS_ABORTED, options['seed'], reason=REASON_OBSTRUCTION, position=e.position)

    result = GenerationResult(STATUS_SCHEDULED, plan.seed, plan=plan)
    scheduler = PlacementScheduler(
        world,
        plan.writes,
        options['max_blocks_per_tick'],
        clock=clock,
        on_complete=options['on_complete'],
        result=result,
    )
    result.scheduler = scheduler
    scheduler.start()
    return result
