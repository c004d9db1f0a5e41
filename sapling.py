"""Elder oak sapling growth: random ticks and bone meal trigger a megatree."""

import random

import config
import logutil
from blocks import AIR, BLOCK_ID, BLOCK_SOFT
import megatree

SAPLING = BLOCK_ID['Elder Oak Sapling']
BONE_MEAL = 'Bone Meal'


class ItemStack(object):
    def __init__(self, name, amount=1):
        self.name = name
        self.amount = amount


def is_space_clear(world, at):
    """ True if the 5x9x5 box above the sapling holds at most
    `config.SAPLING_MAX_SOLIDS` hard blocks. Air, leaves, grass, flowers and
    unloaded cells do not count.
    """
    x0, y0, z0 = at
    solids = 0
    for y in range(y0 + 1, y0 + 10):
        for z in range(z0 - 2, z0 + 3):
            for x in range(x0 - 2, x0 + 3):
                block = world.get_block((x, y, z))
                if block is None or BLOCK_SOFT[block]:
                    continue
                solids += 1
                if solids > config.SAPLING_MAX_SOLIDS:
                    return False
    return True


def try_grow_at(world, at, options=None, clock=None):
    """ Replace the sapling at `at` with a megatree; None if nothing grew. """
    if world.get_block(at) != SAPLING:
        return None
    if not is_space_clear(world, at):
        logutil.log("SAPLING", f"no room to grow at {at}")
        return None
    world.set_block(at, AIR)
    logutil.log("SAPLING", f"growing megatree at {at}")
    return megatree.generate(world, at, options, clock=clock)


def on_random_tick(world, at, options=None, clock=None, roll=None):
    if roll is None:
        roll = random.random()
    if roll >= config.SAPLING_GROW_CHANCE:
        return None
    return try_grow_at(world, at, options, clock=clock)


def use_bone_meal(world, at, held, options=None, clock=None):
    """ Consume one bone meal from `held` and try to grow the sapling.

    Returns (stack_left, result): `stack_left` is None once the stack is used up.
    """
    if held is None or held.name != BONE_MEAL:
        return held, None
    if world.get_block(at) != SAPLING:
        return held, None
    held.amount -= 1
    if held.amount <= 0:
        held = None
    return held, try_grow_at(world, at, options, clock=clock)
