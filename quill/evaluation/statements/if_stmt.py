from __future__ import annotations

from typing import Optional

from quill import EvaluatorFn, ExecutorFn
from quill.diagnostics import wrong_type
from quill.reader.nodes import If, IfBranch, Node
from quill.types.environment import Environment
from quill.types.return_signal import ReturnSignal
from quill.types.value import ValueType, type_of


def _run_branches(
    branches: list[IfBranch],
    orelse: Optional[list[Node]],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    execute_fn: ExecutorFn,
) -> Optional[ReturnSignal]:
    branch = branches[0]
    env.begin(branch.where)

    cond = evaluate_fn(branch.cond, env)
    if type_of(cond) is not ValueType.BOOL:
        raise wrong_type(branch.where, cond, "if statement condition")

    if cond:
        signal = execute_fn(branch.body, env)
    elif len(branches) > 1:
        signal = _run_branches(branches[1:], orelse, env, evaluate_fn, execute_fn)
    else:
        signal = execute_fn(orelse or [], env)

    env.end(execute_fn)
    return signal


def if_stmt(
    stmt: If, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn
) -> Optional[ReturnSignal]:
    """
    if c1 { ... } else if c2 { ... } else { ... }
    Each test opens a scope; an `else if` is tested inside the scope of the
    test before it, so the chain nests one level per branch and the `else`
    body runs in the innermost one. Conditions must be Bool.
    """
    return _run_branches(stmt.branches, stmt.orelse, env, evaluate_fn, execute_fn)
