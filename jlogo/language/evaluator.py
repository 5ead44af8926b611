# jlogo/language/evaluator.py
"""
Expression evaluation.

Values are a closed set of scalar kinds (Number, String, Boolean). Every
operator checks the kinds of its operands explicitly and raises
EvalTypeError on a mismatch; nothing is coerced implicitly except a Boolean
read as a number by a command.
"""
import math
import operator
from dataclasses import dataclass
from typing import Union

from ..errors import EvalTypeError, UnknownVariable
from . import ast


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Boolean:
    value: bool


Scalar = Union[Number, String, Boolean]

COMPARISONS = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}

def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(base: float, exponent: float) -> float:
    try:
        result = math.pow(base, exponent)
    except ValueError:
        # negative base with a fractional exponent, or 0 ** negative
        if base == 0:
            if exponent.is_integer() and exponent % 2 == 1:
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan
    except OverflowError:
        if base < 0 and exponent.is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    return result


ARITHMETIC = {
    "*": operator.mul,
    "/": _divide,
    "+": operator.add,
    "-": operator.sub,
}


def kind_of(value: Scalar) -> str:
    if isinstance(value, Number):
        return "number"
    if isinstance(value, String):
        return "string"
    if isinstance(value, Boolean):
        return "boolean"
    raise AssertionError(f"unsupported scalar {value!r}")


def to_scalar(value) -> Scalar:
    """Wraps a plain Python value (e.g. a pre-seeded variable) as a Scalar."""
    if isinstance(value, (Number, String, Boolean)):
        return value
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, (int, float)):
        return Number(float(value))
    if isinstance(value, str):
        return String(value)
    raise EvalTypeError(f"cannot use {type(value).__name__} as a value")


def as_number(value: Scalar, what: str) -> float:
    """Narrows a scalar to a float for a command operand."""
    if isinstance(value, Number):
        return value.value
    if isinstance(value, Boolean):
        return 1.0 if value.value else 0.0
    raise EvalTypeError(f"{what} must be a number, got {kind_of(value)}")


def _numbers(op: str, lhs: Scalar, rhs: Scalar):
    if not isinstance(lhs, Number):
        raise EvalTypeError(f"invalid arguments for {op}: lhs must be a number, got {kind_of(lhs)}")
    if not isinstance(rhs, Number):
        raise EvalTypeError(f"invalid arguments for {op}: rhs must be a number, got {kind_of(rhs)}")
    return lhs.value, rhs.value


def evaluate(node, context) -> Scalar:
    """Evaluates any expression node against the context's variables."""
    if isinstance(node, ast.Comparison):
        return _evaluate_comparison(node, context)
    if isinstance(node, ast.ArithExpr):
        return _evaluate_chain(node, context)
    if isinstance(node, ast.Term):
        return _evaluate_chain(node, context)
    if isinstance(node, ast.Factor):
        return _evaluate_factor(node, context)
    return _evaluate_value(node, context)


def _evaluate_value(node, context) -> Scalar:
    if isinstance(node, ast.NumberLiteral):
        return Number(node.value)
    if isinstance(node, ast.StringLiteral):
        return String(node.value)
    if isinstance(node, ast.Variable):
        key = node.name.lower()
        if key not in context.variables:
            raise UnknownVariable(node.name)
        return context.variables[key]
    if isinstance(node, ast.Group):
        return evaluate(node.expression, context)
    raise AssertionError(f"unsupported value type {node!r}")


def _evaluate_factor(node: ast.Factor, context) -> Scalar:
    base = _evaluate_value(node.base, context)
    if node.exponent is None:
        return base
    exponent = _evaluate_value(node.exponent, context)
    base_number, exponent_number = _numbers("^", base, exponent)
    return Number(_power(base_number, exponent_number))


def _evaluate_chain(node, context) -> Scalar:
    lhs = evaluate(node.left, context)
    for op, operand in node.rest:
        rhs = evaluate(operand, context)
        lhs_number, rhs_number = _numbers(op, lhs, rhs)
        lhs = Number(ARITHMETIC[op](lhs_number, rhs_number))
    return lhs


def _evaluate_comparison(node: ast.Comparison, context) -> Scalar:
    lhs = evaluate(node.left, context)
    for op, operand in node.rest:
        rhs = evaluate(operand, context)
        compare = COMPARISONS[op]
        if isinstance(lhs, Number):
            if not isinstance(rhs, Number):
                raise EvalTypeError(f"rhs of {op} must be a number, got {kind_of(rhs)}")
        elif isinstance(lhs, String):
            if not isinstance(rhs, String):
                raise EvalTypeError(f"rhs of {op} must be a string, got {kind_of(rhs)}")
        else:
            raise EvalTypeError(f"lhs of {op} must be a number or string, got {kind_of(lhs)}")
        lhs = Boolean(compare(lhs.value, rhs.value))
    return lhs
