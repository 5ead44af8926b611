# jlogo/language/parser.py
from ..config import AppConfig
from ..framework.base_interpreter import BaseInterpreter, parse_dsl, v_args
from . import ast


def _pairs(children):
    """Splits [left, op, operand, op, operand, ...] into left and ((op, operand), ...)."""
    left, rest = children[0], children[1:]
    return left, tuple((str(rest[i]), rest[i + 1]) for i in range(0, len(rest), 2))


class ProgramBuilder(BaseInterpreter):
    """
    Turns the lark parse tree into the immutable command/expression tree.
    Every rule maps onto exactly one node type of jlogo.language.ast.
    """

    def start(self, commands):
        return ast.Program(tuple(commands))

    # --- Command Rules ---
    @v_args(meta=True, inline=True)
    def forward(self, meta, expression):
        return ast.Forward(expression, line=meta.line)

    @v_args(meta=True, inline=True)
    def backward(self, meta, expression):
        return ast.Backward(expression, line=meta.line)

    @v_args(meta=True, inline=True)
    def right(self, meta, expression):
        return ast.Right(expression, line=meta.line)

    @v_args(meta=True, inline=True)
    def left(self, meta, expression):
        return ast.Left(expression, line=meta.line)

    @v_args(meta=True, inline=True)
    def penup(self, meta):
        return ast.PenUp(line=meta.line)

    @v_args(meta=True, inline=True)
    def pendown(self, meta):
        return ast.PenDown(line=meta.line)

    @v_args(meta=True, inline=True)
    def sleep(self, meta, expression):
        return ast.Sleep(expression, line=meta.line)

    @v_args(meta=True, inline=True)
    def repeat(self, meta, times, *commands):
        return ast.Repeat(times, tuple(commands), line=meta.line)

    @v_args(meta=True, inline=True)
    def comment(self, meta, token):
        return ast.Comment(text=str(token), line=meta.line)

    @v_args(meta=True, inline=True)
    def stop(self, meta):
        return ast.Stop(line=meta.line)

    # --- Expression Rules ---
    def expression(self, children):
        return ast.Comparison(*_pairs(children))

    def comp_op(self, tokens):
        # "<" "=" arrives as two tokens
        return "".join(str(t) for t in tokens)

    def arith(self, children):
        return ast.ArithExpr(*_pairs(children))

    def term(self, children):
        return ast.Term(*_pairs(children))

    def factor(self, children):
        return ast.Factor(*children)

    @v_args(inline=True)
    def number(self, value):
        return ast.NumberLiteral(value)

    @v_args(inline=True)
    def string(self, value):
        return ast.StringLiteral(value)

    @v_args(inline=True)
    def variable(self, name):
        return ast.Variable(name)

    @v_args(inline=True)
    def group(self, expression):
        return ast.Group(expression)


def parse(source_text: str, grammar_path: str = None) -> ast.Program:
    """
    Parses a whole program. Every command, including the last one, must be
    terminated by a newline.

    Raises:
        ParseError: on the first token that does not fit the grammar.
    """
    grammar_path = grammar_path or AppConfig.get_grammar_path()
    return parse_dsl(source_text, grammar_path, ProgramBuilder())
