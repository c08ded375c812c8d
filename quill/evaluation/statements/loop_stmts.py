"""Looping statements for Quill: while and for.

A return inside a loop body ends the loop at once and is handed back to
the caller after the loop's scopes have been ended (defers included).
"""

from __future__ import annotations

from typing import Optional

from quill import EvaluatorFn, ExecutorFn, QuillValue
from quill.diagnostics import wrong_type
from quill.errors import QuillControlFlowError
from quill.reader.nodes import For, Node, While
from quill.types.environment import Environment
from quill.types.return_signal import ReturnSignal
from quill.types.value import ValueType, type_of


def _condition(cond: Node, env: Environment, evaluate_fn: EvaluatorFn, where, context: str) -> QuillValue:
    value = evaluate_fn(cond, env)
    if type_of(value) is not ValueType.BOOL:
        raise wrong_type(where, value, context)
    return value


def while_stmt(
    stmt: While, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    """
    while cond { body }
    One scope spans every iteration: declarations and defers accumulate in it.
    """
    env.begin(stmt.where)

    signal = None
    while _condition(stmt.cond, env, evaluate_fn, stmt.where, "while statement condition"):
        signal = execute_fn(stmt.body, env)
        if signal is not None:
            break

    env.end(execute_fn)
    return signal


def for_stmt(
    stmt: For, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    """
    for (init; cond; step) { body }
    The outer scope holds `init`'s declarations; each iteration gets its own
    inner scope, and `step` runs inside it after the body.
    """
    env.begin(stmt.where)

    if stmt.init is not None and execute_fn([stmt.init], env) is not None:
        raise QuillControlFlowError("Unexpected return in for loop", stmt.where)

    signal = None
    while _condition(stmt.cond, env, evaluate_fn, stmt.where, "for statement condition"):
        env.begin(stmt.where)
        signal = execute_fn(stmt.body, env)
        if signal is not None:
            env.end(execute_fn)
            break
        if stmt.step is not None and execute_fn([stmt.step], env) is not None:
            raise QuillControlFlowError("Unexpected return in for loop", stmt.where)
        env.end(execute_fn)

    env.end(execute_fn)
    return signal
