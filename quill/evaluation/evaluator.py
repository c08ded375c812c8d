"""Core evaluator for the Quill interpreter.

`evaluate` computes the value of an expression node; `execute` runs a
statement sequence and reports how it finished: None when it ran to the
end, or the ReturnSignal of the `return` that stopped it. The two recurse
into each other for `do` blocks and function bodies.
"""

from __future__ import annotations

from typing import Optional

from quill import QuillValue
from quill.diagnostics import undefined
from quill.errors import QuillInternalError
from quill.evaluation.apply import apply, run_with_return
from quill.evaluation.operators import BINARY_OPERATORS, UNARY_OPERATORS
from quill.evaluation.statements import STATEMENTS
from quill.reader.nodes import (
    BinaryOp,
    Call,
    Constant,
    DoBlock,
    FunctionLiteral,
    Identifier,
    Node,
    UnaryOp,
)
from quill.types.environment import Environment
from quill.types.function import Function
from quill.types.return_signal import ReturnSignal


def evaluate(expr: Node, env: Environment) -> QuillValue:
    match expr:
        case Constant(value=value):
            return value

        case Identifier(name=name):
            var = env.lookup(name)
            if var is None:
                raise undefined(expr.where, name)
            return var.value

        case FunctionLiteral():
            return Function(expr)

        case DoBlock(body=body):
            env.begin(expr.where)
            value = run_with_return(body, env, execute)
            env.end(execute)
            return value

        case BinaryOp(op=op):
            handler = BINARY_OPERATORS.get(op)
            if handler is None:
                raise QuillInternalError(f"Unknown binary operation '{op}'", expr.where)
            return handler(expr, env, evaluate)

        case UnaryOp(op=op):
            handler = UNARY_OPERATORS.get(op)
            if handler is None:
                raise QuillInternalError(f"Unknown unary operation '{op}'", expr.where)
            return handler(expr, env, evaluate)

        case Call():
            return apply(expr, env, evaluate, execute)

    raise QuillInternalError(
        f"Unknown expression type {type(expr).__name__}", getattr(expr, "where", None)
    )


def execute(statements: list[Node], env: Environment) -> Optional[ReturnSignal]:
    for stmt in statements:
        handler = STATEMENTS.get(type(stmt))
        if handler is None:
            raise QuillInternalError(
                f"Unknown statement type {type(stmt).__name__}", getattr(stmt, "where", None)
            )
        signal = handler(stmt, env, evaluate, execute)
        if signal is not None:
            # A return stops the sequence and travels upward.
            return signal
    return None
