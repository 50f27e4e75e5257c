import pytest

from nodes import RobotInterrupted


class MockRobot:
    """
    Records every action call. Sensor readings come from `readings`: an int
    is returned every time, a list is consumed one value per call. After
    `max_actions` actions the robot raises RobotInterrupted.
    """

    def __init__(self, max_actions=None, **readings):
        self.calls = []
        self.readings = readings
        self.max_actions = max_actions

    def _act(self, name):
        if self.max_actions is not None and len(self.calls) >= self.max_actions:
            raise RobotInterrupted("out of fuel")
        self.calls.append(name)

    def _read(self, name):
        value = self.readings.get(name, 0)
        if isinstance(value, list):
            return value.pop(0)
        return value

    def count(self, name):
        return self.calls.count(name)

    # mutators
    def move(self):
        self._act("move")

    def turn_left(self):
        self._act("turn_left")

    def turn_right(self):
        self._act("turn_right")

    def take_fuel(self):
        self._act("take_fuel")

    def idle_wait(self):
        self._act("idle_wait")

    def turn_around(self):
        self._act("turn_around")

    def set_shield(self, on):
        self._act("shield_on" if on else "shield_off")

    # sensors
    def get_fuel(self):
        return self._read("fuel")

    def get_opponent_lr(self):
        return self._read("opp_lr")

    def get_opponent_fb(self):
        return self._read("opp_fb")

    def num_barrels(self):
        return self._read("barrels")

    def get_closest_barrel_lr(self):
        return self._read("barrel_lr")

    def get_closest_barrel_fb(self):
        return self._read("barrel_fb")

    def get_distance_to_wall(self):
        return self._read("wall")


@pytest.fixture
def make_robot():
    return MockRobot


@pytest.fixture
def robot():
    return MockRobot()
