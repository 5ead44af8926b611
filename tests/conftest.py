import pytest

from jlogo.errors import DeviceError
from jlogo.turtles import BaseTurtle, Turtle


class RecordingTurtle(Turtle):
    """Kinematic turtle that remembers every call made to it."""

    def __init__(self):
        self.inner = BaseTurtle()
        self.calls = []

    def move(self, steps):
        self.calls.append(("move", steps))
        return self.inner.move(steps)

    def rotate(self, deg):
        self.calls.append(("rotate", deg))
        return self.inner.rotate(deg)

    def pen_up(self, state):
        self.calls.append(("pen_up", state))
        return self.inner.pen_up(state)

    def state(self):
        return self.inner.state()

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)


class FakeLine:
    """GPIO line double; raises once `fail_after` writes have succeeded."""

    def __init__(self, fail_after=None):
        self.values = []
        self.fail_after = fail_after

    def enable(self, value):
        if self.fail_after is not None and len(self.values) >= self.fail_after:
            raise DeviceError("line write failed")
        self.values.append(value)


class FakePWM:
    def __init__(self):
        self.duty_cycles = []

    def duty_cycle(self, dc):
        self.duty_cycles.append(dc)


class FakeServo:
    def __init__(self, fail=False):
        self.angles = []
        self.fail = fail

    def angle(self, deg):
        if self.fail:
            raise DeviceError("servo write failed")
        self.angles.append(deg)


class FakeWheel:
    def __init__(self, fail_after=None):
        self.steps = []
        self.fail_after = fail_after

    def step_one(self, direction):
        if self.fail_after is not None and len(self.steps) >= self.fail_after:
            raise DeviceError("stepper write failed")
        self.steps.append(direction)


class FakeDevice:
    closed = False

    def close(self):
        self.closed = True


class FakeSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def turtle():
    return RecordingTurtle()


@pytest.fixture
def fake_sleep():
    return FakeSleep()
