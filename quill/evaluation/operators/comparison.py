"""Ordering operators: > >= < <=. Both sides must be Numbers."""

from __future__ import annotations

import operator
from typing import Callable

from quill import EvaluatorFn, QuillValue
from quill.diagnostics import wrong_type
from quill.reader.nodes import BinaryOp
from quill.types.environment import Environment
from quill.types.value import ValueType, type_of


def _comparison(symbol: str, compare: Callable[[float, float], bool]):
    def handler(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
        left = evaluate_fn(node.left, env)
        right = evaluate_fn(node.right, env)
        if type_of(right) is not type_of(left):
            raise wrong_type(
                node.where, left, f"right side of '{symbol}' operation, expected same as left side"
            )
        if type_of(left) is not ValueType.NUMBER:
            raise wrong_type(node.where, left, f"left side of '{symbol}' operation")
        return compare(left, right)

    handler.__name__ = f"compare_{compare.__name__}"
    return handler


greater = _comparison(">", operator.gt)
greater_equal = _comparison(">=", operator.ge)
less = _comparison("<", operator.lt)
less_equal = _comparison("<=", operator.le)
