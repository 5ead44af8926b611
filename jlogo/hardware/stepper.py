# jlogo/hardware/stepper.py
import time
from typing import Callable, Sequence

from ..errors import BadPatternError, NoPinsError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Half-step sequence for a four-line driver board, last row releases every coil.
STANDARD_STEPPER_PATTERN = (
    (False, False, False, True),
    (False, False, True, True),
    (False, False, True, False),
    (False, True, True, False),
    (False, True, False, False),
    (True, True, False, False),
    (True, False, False, False),
    (True, False, False, True),
    (False, False, False, False),
)


class GPIOStepper:
    """
    Drives a stepper motor by cycling a phase pattern across digital lines.

    Each line only needs an ``enable(bool)`` method. A failed write aborts the
    step; the phase index keeps whatever value it had reached.
    """

    def __init__(self, lines: Sequence, pattern: Sequence[Sequence[bool]] = STANDARD_STEPPER_PATTERN,
                 delay: float = 0.001, sleep: Callable[[float], None] = time.sleep):
        if not lines:
            raise NoPinsError()
        if not pattern:
            raise BadPatternError()
        for row in pattern:
            if len(row) != len(lines):
                raise BadPatternError()

        self.lines = list(lines)
        self.pattern = tuple(tuple(bool(v) for v in row) for row in pattern)
        self.delay = delay
        self.sleep = sleep
        self.current_step = 0
        logger.debug(f"Stepper ready: {len(self.lines)} lines, {len(self.pattern)} phases")

    def step_one(self, direction: int):
        self.current_step = (self.current_step + direction) % len(self.pattern)
        phase = self.pattern[self.current_step]
        for line, value in zip(self.lines, phase):
            line.enable(value)

    def step(self, n: int):
        direction = 1
        if n < 0:
            direction = -1
            n = -n
        for _ in range(n):
            self.step_one(direction)
            self.sleep(self.delay)

    def forward(self):
        self.step(1)

    def backward(self):
        self.step(-1)
