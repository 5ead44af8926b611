# jlogo/turtles/text.py
import sys
from typing import TextIO

from .base import BaseTurtle, Turtle

PEN_STATES = {False: "down", True: "up"}


def format_number(value) -> str:
    """Shortest exact form of a float, without a trailing '.0'."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class TextTurtle(Turtle):
    """
    Wraps another turtle and reports every action, with the resulting state,
    to an output stream. The report is written even if the wrapped turtle fails.
    """

    def __init__(self, output: TextIO = None, turtle: Turtle = None):
        self.turtle = turtle if turtle is not None else BaseTurtle()
        self.output = output if output is not None else sys.stdout

    def _report(self, message: str):
        self.output.write(message + "\n")

    def move(self, steps):
        try:
            return self.turtle.move(steps)
        finally:
            state = self.state()
            x, y = format_number(state.x), format_number(state.y)
            self._report(f"Moved {format_number(steps)} steps. Now at ({x}, {y})")

    def rotate(self, deg):
        try:
            return self.turtle.rotate(deg)
        finally:
            heading = format_number(self.state().heading)
            self._report(f"Rotated {format_number(deg)} degrees. Now facing {heading}")

    def pen_up(self, state):
        try:
            return self.turtle.pen_up(state)
        finally:
            self._report(f"Pen is now {PEN_STATES[self.state().pen_up]}")

    def state(self):
        return self.turtle.state()

    def close(self):
        self.turtle.close()
