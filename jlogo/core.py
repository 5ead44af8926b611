# jlogo/core.py
import time
from typing import Any, Callable, Dict, Optional, TextIO

from .errors import LogoError
from .language.interpreter import run
from .language.parser import parse
from .utils.logger import get_logger

logger = get_logger(__name__)


def read_program_file(path: str) -> str:
    """Reads a program from disk."""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_source(
    source_text: str,
    turtle,
    input_stream: TextIO = None,
    output_stream: TextIO = None,
    functions: Optional[Dict[str, Callable]] = None,
    variables: Optional[Dict[str, Any]] = None,
    sleep: Callable[[float], None] = time.sleep,
):
    """Parses and runs program text. A missing final newline is supplied."""
    if not source_text.endswith(("\n", "\r")):
        source_text += "\n"
    program = parse(source_text)
    logger.debug(f"Parsed {len(program)} top-level commands")
    run(program, turtle, input_stream, output_stream, functions, variables, sleep)
    return program


def process_program_request(
    source_text: str,
    turtle,
    variables: Optional[Dict[str, Any]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """
    Runs a program and reports the outcome as a status dictionary instead of raising.
    Only language and device errors are reported; internal defects propagate.
    """
    try:
        program = run_source(source_text, turtle, variables=variables, sleep=sleep)
    except LogoError as e:
        logger.error(f"Program failed: {e}")
        return {"status": "error", "message": e.message, "line": e.line, "state": turtle.state().to_dict()}

    return {"status": "success", "commands": len(program), "state": turtle.state().to_dict()}
