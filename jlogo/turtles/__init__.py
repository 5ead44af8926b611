from .base import BaseTurtle, Turtle, TurtleState
from .pi import PiTurtle, ServoPen, init_pi_turtle, new_wheel
from .text import TextTurtle
