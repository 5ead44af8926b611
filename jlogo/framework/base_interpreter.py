# jlogo/framework/base_interpreter.py
from functools import lru_cache

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ..errors import ParseError

__all__ = ["BaseInterpreter", "v_args", "load_parser", "parse_dsl"]


class BaseInterpreter(Transformer):
    def IDENT(self, ident):
        return ident.value

    def NUMBER(self, num):
        return float(num.value)

    def ESCAPED_STRING(self, s):
        return s[1:-1].replace('\\"', '"').replace('\\\\', '\\')


@lru_cache(maxsize=None)
def load_parser(grammar_path: str) -> Lark:
    """Builds (once per grammar file) an LALR parser with line tracking."""
    with open(grammar_path, 'r') as f:
        grammar = f.read()
    return Lark(grammar, parser="lalr", propagate_positions=True)


def _describe(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    if isinstance(error, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            return "unexpected end of input"
        expected = ", ".join(sorted(error.expected)) if error.expected else "nothing"
        return f"unexpected {error.token.type} {str(error.token)!r}, expected one of: {expected}"
    return str(error)


def parse_dsl(dsl_text: str, grammar_path: str, builder: Transformer):
    """
    Parses DSL text and lets a transformer build the syntax tree from it.

    Args:
        dsl_text: The string containing the DSL code.
        grammar_path: The file path to the Lark grammar.
        builder: Transformer turning the lark tree into the caller's nodes.

    Raises:
        ParseError: the text does not match the grammar. Parsing is all or nothing.
    """
    parser = load_parser(grammar_path)
    try:
        tree = parser.parse(dsl_text)
    except UnexpectedInput as e:
        line = e.line if isinstance(e.line, int) and e.line > 0 else None
        column = e.column if isinstance(e.column, int) and e.column > 0 else None
        context = e.get_context(dsl_text) if line is not None else ""
        raise ParseError(_describe(e), line, column, context) from e

    return builder.transform(tree)
