# jlogo/language/interpreter.py
import math
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TextIO

from ..errors import EvalError, LogoError
from ..utils.logger import get_logger
from . import ast
from .evaluator import Scalar, as_number, evaluate, to_scalar

logger = get_logger(__name__)


@dataclass
class Context:
    """State of a single program run."""
    turtle: Any
    variables: Dict[str, Scalar] = field(default_factory=dict)
    # User-provided functions; no built-in command calls them yet.
    functions: Dict[str, Callable] = field(default_factory=dict)
    input: TextIO = sys.stdin
    output: TextIO = sys.stdout
    sleep: Callable[[float], None] = time.sleep


def _operand(command, context: Context, what: str) -> float:
    return as_number(evaluate(command.expression, context), what)


def run_command(command: ast.Command, context: Context):
    logger.debug(f"line {command.line}: {command}")
    turtle = context.turtle

    if isinstance(command, ast.Forward):
        turtle.move(_operand(command, context, "FORWARD distance"))
    elif isinstance(command, ast.Backward):
        turtle.move(-_operand(command, context, "BACKWARD distance"))
    elif isinstance(command, ast.Right):
        turtle.rotate(_operand(command, context, "RIGHT angle"))
    elif isinstance(command, ast.Left):
        turtle.rotate(-_operand(command, context, "LEFT angle"))
    elif isinstance(command, ast.PenUp):
        turtle.pen_up(True)
    elif isinstance(command, ast.PenDown):
        turtle.pen_up(False)
    elif isinstance(command, ast.Sleep):
        millis = _operand(command, context, "SLEEP duration")
        if not math.isfinite(millis):
            raise EvalError(f"SLEEP duration must be finite, got {millis}")
        context.sleep(max(millis, 0.0) / 1000.0)
    elif isinstance(command, ast.Repeat):
        times = as_number(evaluate(command.times, context), "REPEAT count")
        # Counting up in floats: a count of 2.5 runs the body three times.
        i = 0.0
        while i < times:
            run_commands(command.commands, context)
            i += 1
    elif isinstance(command, ast.Comment):
        pass
    elif isinstance(command, ast.Stop):
        # Recognised but does not end the run.
        logger.debug(f"line {command.line}: STOP has no effect")
    else:
        raise AssertionError(f"unsupported command {command!r}")


def run_commands(commands, context: Context):
    """Runs commands in order. The first failure aborts the whole run."""
    for command in commands:
        try:
            run_command(command, context)
        except LogoError as e:
            if e.line is None:
                e.line = command.line
            raise


def run(
    program: ast.Program,
    turtle,
    input_stream: TextIO = None,
    output_stream: TextIO = None,
    functions: Optional[Dict[str, Callable]] = None,
    variables: Optional[Dict[str, Any]] = None,
    sleep: Callable[[float], None] = time.sleep,
):
    """
    Executes a parsed program against a turtle.

    Args:
        program: The parsed program.
        turtle: Any jlogo.turtles.Turtle.
        input_stream: Reader available to the program (defaults to stdin).
        output_stream: Writer available to the program (defaults to stdout).
        functions: Callables exposed to the program by name.
        variables: Initial variable values; plain numbers and strings are accepted.
        sleep: Blocking sleep used by SLEEP, in seconds.
    """
    if len(program) == 0:
        return

    context = Context(
        turtle=turtle,
        variables={name.lower(): to_scalar(value) for name, value in (variables or {}).items()},
        functions=dict(functions or {}),
        input=input_stream if input_stream is not None else sys.stdin,
        output=output_stream if output_stream is not None else sys.stdout,
        sleep=sleep,
    )
    run_commands(program.commands, context)
