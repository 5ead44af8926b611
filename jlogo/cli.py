"""
Command line entry point: run a program file, or type commands at a prompt.
"""
import argparse
import re
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from .config import AppConfig, PiTurtleConfig
from .core import process_program_request, read_program_file
from .errors import LogoError
from .turtles import TextTurtle, Turtle, init_pi_turtle
from .utils.logger import get_logger, setup_logger

logger = get_logger(__name__)

PROMPT = "> "
CONTINUATION_PROMPT = ". "

_STRING_RE = re.compile(r'"(\\.|[^"\\])*"')
_COMMENT_RE = re.compile(r'(?i)(\brem\b|#).*')


def bracket_depth(text: str) -> int:
    """Open REPEAT brackets left in text, ignoring strings and comments."""
    depth = 0
    for line in text.splitlines():
        line = _COMMENT_RE.sub("", _STRING_RE.sub('""', line))
        depth += line.count("[") - line.count("]")
    return depth


def parse_definitions(items: Optional[List[str]]) -> Dict[str, Any]:
    """Turns NAME=VALUE pairs into variables: floats where possible, strings otherwise."""
    variables = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {item!r}")
        try:
            variables[name.strip()] = float(value)
        except ValueError:
            variables[name.strip()] = value
    return variables


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jlogo",
        description="Run Logo programs on a text turtle or a Raspberry Pi pen robot.",
    )
    parser.add_argument("--pi", action="store_true", default=AppConfig.USE_PI,
                        help="Use the pi turtle (stepper wheels and servo pen)")
    parser.add_argument("--file", "-f", help="Run this program instead of reading commands interactively")
    parser.add_argument("--define", "-D", action="append", metavar="NAME=VALUE",
                        help="Pre-set a variable; may be repeated")
    parser.add_argument("--log-level", default=AppConfig.LOG_LEVEL,
                        help="DEBUG, INFO, WARNING or ERROR (default: %(default)s)")
    return parser


def make_turtle(use_pi: bool, output: TextIO) -> Turtle:
    if use_pi:
        logger.info("Using pi turtle!")
        return init_pi_turtle(PiTurtleConfig.from_env(), output)
    logger.info("Using text turtle!")
    return TextTurtle(output)


def run_file(path: str, turtle: Turtle, variables: Dict[str, Any], output: TextIO) -> int:
    try:
        source = read_program_file(path)
    except OSError as e:
        logger.error(f"Error reading file {path}, got {e}")
        output.write(f"ERROR: cannot read {path}: {e}\n")
        return 1

    result = process_program_request(source, turtle, variables)
    if result["status"] != "success":
        where = f"line {result['line']}: " if result["line"] is not None else ""
        output.write(f"ERROR: {where}{result['message']}\n")
        return 1
    return 0


def run_interactive(turtle: Turtle, variables: Dict[str, Any], output: TextIO,
                    input_fn: Callable[[str], str] = input) -> int:
    """
    Reads commands until end of input. A REPEAT may span several lines; input
    is buffered until its brackets close. Errors are reported and the prompt
    continues with the same turtle.
    """
    buffer = ""
    while True:
        try:
            line = input_fn(CONTINUATION_PROMPT if buffer else PROMPT)
        except (EOFError, KeyboardInterrupt):
            break

        buffer += line + "\n"
        if bracket_depth(buffer) > 0:
            continue

        source, buffer = buffer, ""
        if not source.strip():
            continue
        result = process_program_request(source, turtle, variables)
        if result["status"] != "success":
            output.write(f"ERROR: {result['message']}\n")
    return 0


def main(argv: Optional[List[str]] = None, output: TextIO = None,
         input_fn: Callable[[str], str] = input) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)
    output = output or sys.stdout

    setup_logger(args.log_level)
    logger.info("Welcome to jlogo!")

    try:
        variables = parse_definitions(args.define)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        turtle = make_turtle(args.pi, output)
    except LogoError as e:
        output.write(f"ERROR: {e}\n")
        return 1

    try:
        if args.file:
            return run_file(args.file, turtle, variables, output)
        return run_interactive(turtle, variables, output, input_fn)
    finally:
        try:
            turtle.close()
        except LogoError as e:
            logger.error(f"Failed to close the turtle: {e}")


if __name__ == "__main__":
    sys.exit(main())
