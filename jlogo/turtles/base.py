# jlogo/turtles/base.py
import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class TurtleState:
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    pen_up: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Turtle(ABC):
    """Everything the interpreter may ask of a turtle. Failures are raised."""

    @abstractmethod
    def move(self, steps: float) -> Tuple[float, float]:
        """Moves steps along the heading (backwards if negative), returns the position."""

    @abstractmethod
    def rotate(self, deg: float) -> float:
        """Rotates clockwise (counter-clockwise if negative), returns the heading."""

    @abstractmethod
    def pen_up(self, state: bool) -> bool:
        """pen_up(True) stops drawing, pen_up(False) starts again. Returns the pen state."""

    @abstractmethod
    def state(self) -> TurtleState:
        ...

    def close(self):
        pass


class BaseTurtle(Turtle):
    """Kinematic bookkeeping only: starts at the origin, heading 0, pen down."""

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.heading = 0.0
        self.is_pen_up = False

    def move(self, steps):
        # Position is set from the origin along the heading, not accumulated.
        rad = math.radians(self.heading)
        self.x = steps * math.cos(rad)
        self.y = steps * math.sin(rad)
        return self.x, self.y

    def rotate(self, deg):
        self.heading = (self.heading + deg) % 360
        return self.heading

    def pen_up(self, state):
        self.is_pen_up = bool(state)
        return self.is_pen_up

    def state(self):
        return TurtleState(self.x, self.y, self.heading, self.is_pen_up)
