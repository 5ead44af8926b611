from .evaluator import Boolean, Number, String, evaluate
from .interpreter import Context, run, run_commands
from .parser import parse
