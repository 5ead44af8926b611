"""jlogo: a small Logo interpreter driving text or robot turtles."""
from .core import process_program_request, run_source
from .errors import EvalError, EvalTypeError, LogoError, ParseError, TurtleError, UnknownVariable
from .language.interpreter import run
from .language.parser import parse

__version__ = "0.1.0"
