"""Call dispatch for Quill.

A call names its callee. Builtins are tried first; otherwise the name is
looked up in the scope stack and, if it holds a Function, the function body
is run in a fresh scope on top of the caller's scopes. Nothing is captured
when a function value is created, so free names in the body see whatever
the caller can see at that moment.
"""

from __future__ import annotations

from quill import EvaluatorFn, ExecutorFn, QuillValue
from quill.builtin.io_builtin import lookup_builtin
from quill.diagnostics import wrong_arg_count
from quill.errors import QuillUnknownFunctionError
from quill.reader.nodes import Call, Node
from quill.types.environment import Environment
from quill.types.function import Function
from quill.types.nil import Nil


def run_with_return(body: list[Node], env: Environment, execute_fn: ExecutorFn) -> QuillValue:
    """Execute `body` as a return-capturing boundary; yield the returned value or Nil."""
    env.enter_boundary()
    signal = execute_fn(body, env)
    env.leave_boundary()
    return Nil if signal is None else signal.value


def apply_function(
    fn: Function,
    call: Call,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    execute_fn: ExecutorFn,
) -> QuillValue:
    """Invoke a Function value with the call's arguments."""
    params = fn.params
    if len(call.args) != len(params):
        raise wrong_arg_count(call.where, len(call.args), len(params))

    # Arguments are evaluated in the caller's scope, before the new one opens.
    args = [evaluate_fn(arg, env) for arg in call.args]

    env.begin(call.where)
    for name, value in zip(params, args):
        env.declare(name, value, fn.node.where)
    result = run_with_return(fn.body, env, execute_fn)
    env.end(execute_fn)
    return result


def apply(call: Call, env: Environment, evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn) -> QuillValue:
    """Dispatch a call expression by name."""
    builtin = lookup_builtin(call.name)
    if builtin is not None:
        return builtin(call, env, evaluate_fn)

    var = env.lookup(call.name)
    if var is not None and isinstance(var.value, Function):
        return apply_function(var.value, call, env, evaluate_fn, execute_fn)

    raise QuillUnknownFunctionError(f"Unknown function '{call.name}'", call.where)
