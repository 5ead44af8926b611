# jlogo/language/ast.py
"""
Command and expression trees produced by the parser.

All nodes are frozen: a parsed program is never mutated, it is only walked
by the evaluator and the interpreter.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


# --- Expressions ---
@dataclass(frozen=True)
class NumberLiteral:
    value: float


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Group:
    expression: "Comparison"


Value = Union[NumberLiteral, StringLiteral, Variable, Group]


@dataclass(frozen=True)
class Factor:
    base: Value
    exponent: Optional[Value] = None


@dataclass(frozen=True)
class Term:
    left: Factor
    rest: Tuple[Tuple[str, Factor], ...] = ()


@dataclass(frozen=True)
class ArithExpr:
    left: Term
    rest: Tuple[Tuple[str, Term], ...] = ()


@dataclass(frozen=True)
class Comparison:
    left: ArithExpr
    rest: Tuple[Tuple[str, ArithExpr], ...] = ()


Expression = Comparison


# --- Commands ---
@dataclass(frozen=True)
class Command:
    line: Optional[int] = field(default=None, compare=False, kw_only=True)


@dataclass(frozen=True)
class Forward(Command):
    expression: Expression


@dataclass(frozen=True)
class Backward(Command):
    expression: Expression


@dataclass(frozen=True)
class Right(Command):
    expression: Expression


@dataclass(frozen=True)
class Left(Command):
    expression: Expression


@dataclass(frozen=True)
class PenUp(Command):
    pass


@dataclass(frozen=True)
class PenDown(Command):
    pass


@dataclass(frozen=True)
class Sleep(Command):
    expression: Expression


@dataclass(frozen=True)
class Repeat(Command):
    times: Expression
    commands: Tuple[Command, ...]


@dataclass(frozen=True)
class Comment(Command):
    text: str = ""


@dataclass(frozen=True)
class Stop(Command):
    pass


@dataclass(frozen=True)
class Program:
    commands: Tuple[Command, ...] = ()

    def __len__(self):
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)
