from quill import EvaluatorFn, QuillValue
from quill.diagnostics import wrong_type
from quill.reader.nodes import BinaryOp
from quill.types.environment import Environment
from quill.types.value import ValueType, type_of


def _bool_operands(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn, symbol: str):
    # No short-circuit: the right side is evaluated whatever the left gives.
    left = evaluate_fn(node.left, env)
    right = evaluate_fn(node.right, env)
    if type_of(left) is not ValueType.BOOL:
        raise wrong_type(node.where, left, f"left side of '{symbol}' operation")
    if type_of(right) is not ValueType.BOOL:
        raise wrong_type(node.where, right, f"right side of '{symbol}' operation, expected same as left side")
    return left, right


def logical_and(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    left, right = _bool_operands(node, env, evaluate_fn, "and")
    return left and right


def logical_or(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    left, right = _bool_operands(node, env, evaluate_fn, "or")
    return left or right
