"""Arithmetic operators: + - * / ^.

`+` also concatenates strings. Everything else is Number-only. Results are
IEEE doubles; only division by zero is reported as an error.
"""

from __future__ import annotations

import math
from typing import Callable

from quill import EvaluatorFn, QuillValue
from quill.diagnostics import wrong_type
from quill.errors import QuillArithmeticError
from quill.reader.nodes import BinaryOp
from quill.types.environment import Environment
from quill.types.value import ValueType, type_of


def c_pow(base: float, exponent: float) -> float:
    """pow() with C semantics: NaN and infinities instead of Python exceptions."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = exponent.is_integer() and exponent % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        if base == 0:
            # 0 to a negative power
            odd = exponent.is_integer() and exponent % 2 == 1
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan


def divide(left: float, right: float, where) -> float:
    if right == 0:
        raise QuillArithmeticError("division by zero", where)
    return left / right


def add(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    left = evaluate_fn(node.left, env)
    right = evaluate_fn(node.right, env)
    if type_of(right) is not type_of(left):
        raise wrong_type(node.where, right, "right side of '+' operation, expected same as left side")
    if type_of(left) not in (ValueType.NUMBER, ValueType.STRING):
        raise wrong_type(node.where, left, "left side of '+' operation")
    # float + float or str + str (a fresh string)
    return left + right


def _numeric(symbol: str, compute: Callable[[float, float, object], float]):
    def handler(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
        left = evaluate_fn(node.left, env)
        right = evaluate_fn(node.right, env)
        if type_of(left) is not ValueType.NUMBER:
            raise wrong_type(node.where, left, f"left side of '{symbol}' operation")
        if type_of(right) is not ValueType.NUMBER:
            raise wrong_type(
                node.where, right, f"right side of '{symbol}' operation, expected same as left side"
            )
        return compute(left, right, node.where)

    return handler


subtract = _numeric("-", lambda a, b, _: a - b)
multiply = _numeric("*", lambda a, b, _: a * b)
div = _numeric("/", divide)
power = _numeric("^", lambda a, b, _: c_pow(a, b))
