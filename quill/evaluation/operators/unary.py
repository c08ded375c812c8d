from quill import EvaluatorFn, QuillValue
from quill.diagnostics import wrong_type
from quill.reader.nodes import UnaryOp
from quill.types.environment import Environment
from quill.types.value import ValueType, type_of


def positive(node: UnaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    value = evaluate_fn(node.operand, env)
    if type_of(value) is not ValueType.NUMBER:
        raise wrong_type(node.where, value, "'+' unary operation")
    return value


def negative(node: UnaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    value = evaluate_fn(node.operand, env)
    if type_of(value) is not ValueType.NUMBER:
        raise wrong_type(node.where, value, "'-' unary operation")
    return -value


def logical_not(node: UnaryOp, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    value = evaluate_fn(node.operand, env)
    if type_of(value) is not ValueType.BOOL:
        raise wrong_type(node.where, value, "'not' operation")
    return not value
