import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from world import SectorWorld


class ManualClock(object):
    """Turn scheduler driven by the test: nothing runs until `run_turn`."""

    def __init__(self):
        self.queue = []
        self.delays = []

    def schedule_next(self, fn):
        self.queue.append(fn)

    def schedule_after(self, fn, delay_ms):
        self.delays.append(delay_ms)
        self.queue.append(fn)

    def run_turn(self):
        pending, self.queue = self.queue, []
        for fn in pending:
            fn()
        return len(pending)

    def run_until_idle(self, max_turns=100000):
        turns = 0
        while self.queue and turns < max_turns:
            self.run_turn()
            turns += 1
        return turns


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    monkeypatch.setattr(config, "LOG_COLOR", False)
    monkeypatch.setattr(config, "LOG_SCHEDULER", False)


@pytest.fixture
def air_world():
    world = SectorWorld()
    world.load_region((-64, -64), (64, 64))
    return world


@pytest.fixture
def ground_world():
    world = SectorWorld()
    world.load_region((-64, -64), (64, 64), ground_y=64)
    return world


@pytest.fixture
def manual_clock():
    return ManualClock()
