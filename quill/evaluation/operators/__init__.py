"""Registry of operators for the Quill evaluator.

Maps operator text to the handler implementing its type contract. Every
handler receives the unevaluated node, the environment and the evaluator,
and evaluates its own operands.
"""

from quill.evaluation.operators.equality import equals, not_equals
from quill.evaluation.operators.comparison import greater, greater_equal, less, less_equal
from quill.evaluation.operators.logic import logical_and, logical_or
from quill.evaluation.operators.assignment import assign, add_assign, sub_assign, mul_assign, div_assign
from quill.evaluation.operators.arithmetic import add, subtract, multiply, div, power
from quill.evaluation.operators.unary import positive, negative, logical_not

BINARY_OPERATORS = {
    "==": equals,
    "/=": not_equals,
    ">": greater,
    ">=": greater_equal,
    "<": less,
    "<=": less_equal,
    "and": logical_and,
    "or": logical_or,
    "=": assign,
    "++": add_assign,
    "--": sub_assign,
    "**": mul_assign,
    "//": div_assign,
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": div,
    "^": power,
}

UNARY_OPERATORS = {
    "+": positive,
    "-": negative,
    "not": logical_not,
}
