"""Debug spawn command.

    python main.py [delay_ms] [seed]

Builds a flat debug world, spawns a megatree on the ground at the origin and
ticks the pyglet clock until it has finished. A positive delay selects the
layer-by-layer growth mode with that pause between layers.
"""
import sys
import time

import pyglet

import config
import logutil
import megatree
from blocks import BLOCK_ID
from world import SectorWorld


def _number(arg):
    try:
        value = float(arg)
    except ValueError:
        return None
    return value if value > 0 else None


def spawn(delay_ms=None, seed=None):
    world = SectorWorld()
    r = config.DEBUG_WORLD_RADIUS
    world.load_region((-r, -r), (r, r), ground_y=config.DEBUG_GROUND_LEVEL)
    origin = (0, config.DEBUG_GROUND_LEVEL, 0)
    result = megatree.generate(world, origin, {'seed': seed, 'step_delay_ms': delay_ms})
    while not result.done:
        pyglet.clock.tick()
        time.sleep(1.0 / config.TICKS_PER_SEC)
    leaves = world.positions_of(BLOCK_ID['Oak Leaves'])
    top = max(y for _, y, _ in leaves) if leaves else origin[1]
    logutil.log(
        "MAIN",
        f"{result} logs={world.count(BLOCK_ID['Oak Log'])} leaves={len(leaves)} height={top - origin[1] + 1}",
    )
    return result


def main():
    delay_ms = None
    seed = None
    if len(sys.argv) > 1:
        delay_ms = _number(sys.argv[1])
    if len(sys.argv) > 2:
        try:
            seed = int(sys.argv[2])
        except ValueError:
            logutil.log("MAIN", f"ignoring seed {sys.argv[2]!r}", level="WARN")
    if delay_ms is not None:
        delay_ms = int(delay_ms)
    spawn(delay_ms, seed)


if __name__ == '__main__':
    main()
