"""Assignment family: = and the compound forms ++ -- ** //.

The right side is evaluated first, then the target is resolved. A variable
keeps its type for life: assignment must supply a value of the same type.
"""

from __future__ import annotations

from typing import Callable

from quill import EvaluatorFn, QuillValue
from quill.diagnostics import fatal, undefined, wrong_type
from quill.reader.nodes import BinaryOp, Identifier
from quill.types.environment import Environment, Variable
from quill.types.value import ValueType, type_of
from quill.evaluation.operators.arithmetic import divide


def _resolve(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> tuple[Variable, QuillValue]:
    if not isinstance(node.left, Identifier):
        raise fatal(f"left side of '{node.op}' expected variable", node.where)
    value = evaluate_fn(node.right, env)
    var = env.lookup(node.left.name)
    if var is None:
        raise undefined(node.where, node.left.name)
    return var, value


def assign(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    var, value = _resolve(node, env, evaluate_fn)
    if type_of(value) is not type_of(var.value):
        raise wrong_type(node.where, value, "assignment")
    var.value = value
    return value


def _compound(symbol: str, compute: Callable[[float, float, object], float]):
    def handler(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
        var, value = _resolve(node, env, evaluate_fn)
        if type_of(value) is not type_of(var.value):
            raise wrong_type(node.where, value, f"'{symbol}' assignment")
        if type_of(value) is not ValueType.NUMBER:
            raise wrong_type(node.where, value, f"left side of '{symbol}' assignment")
        var.value = compute(var.value, value, node.where)
        return var.value

    return handler


add_assign = _compound("++", lambda a, b, _: a + b)
sub_assign = _compound("--", lambda a, b, _: a - b)
mul_assign = _compound("**", lambda a, b, _: a * b)
div_assign = _compound("//", divide)
