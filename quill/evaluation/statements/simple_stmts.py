"""Straight-line statements: expressions, let, return and defer."""

from __future__ import annotations

from typing import Optional

from quill import EvaluatorFn, ExecutorFn
from quill.errors import QuillControlFlowError, QuillRedeclarationError
from quill.reader.nodes import Defer, ExprStmt, Let, Return
from quill.types.environment import Environment
from quill.types.nil import Nil
from quill.types.return_signal import ReturnSignal


def expression_stmt(
    stmt: ExprStmt, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    evaluate_fn(stmt.expr, env)
    return None


def let_stmt(
    stmt: Let, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    """
    let a = 1, b, c = a + 1
    Bindings are declared in order. Each initializer runs before its own name
    is declared, so it sees earlier bindings of the chain but never itself.
    """
    for binding in stmt.bindings:
        if env.is_declared_here(binding.name):
            raise QuillRedeclarationError(f"Variable '{binding.name}' redeclared", binding.where)
        value = Nil if binding.value is None else evaluate_fn(binding.value, env)
        env.declare(binding.name, value, binding.where)
    return None


def return_stmt(
    stmt: Return, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    if env.boundaries == 0:
        raise QuillControlFlowError("Unexpected return", stmt.where)
    return ReturnSignal(evaluate_fn(stmt.value, env), stmt.where)


def defer_stmt(
    stmt: Defer, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    # Nothing is evaluated now; the body runs when the current scope ends.
    env.defer(stmt)
    return None
