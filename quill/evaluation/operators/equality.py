from quill import EvaluatorFn, QuillValue
from quill.reader.nodes import BinaryOp
from quill.types.environment import Environment
from quill.types.value import values_equal


def equals(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    # Values of different types compare unequal; never a type error.
    left = evaluate_fn(node.left, env)
    right = evaluate_fn(node.right, env)
    return values_equal(left, right)


def not_equals(node: BinaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    return not equals(node, env, evaluate_fn)
