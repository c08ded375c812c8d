"""Built-in functions for the Quill runtime.

Builtins receive the call node with its arguments still unevaluated and
evaluate them themselves, so each one decides the order in which argument
side effects and its own output interleave.
"""
from __future__ import annotations

import math
import re
import sys
from typing import Callable, Optional, TextIO

import click

from quill import EvaluatorFn, QuillValue
from quill.config import color_enabled
from quill.diagnostics import fatal, panic_header, wrong_arg_count, wrong_type
from quill.errors import ProgramExit
from quill.reader.nodes import Call
from quill.types.environment import Environment
from quill.types.nil import Nil
from quill.types.value import ValueType, render, type_of

BuiltinFn = Callable[[Call, Environment, EvaluatorFn], QuillValue]

# strtod-style prefix: optional sign, then a decimal, inf/infinity or nan
_LEADING_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def parse_leading_float(text: str) -> float:
    """Parse the number at the start of `text`; 0 when there is none."""
    m = _LEADING_FLOAT_RE.match(text)
    return float(m.group(1)) if m else 0.0


def _write_args(call: Call, env: Environment, evaluate_fn: EvaluatorFn, stream: TextIO) -> None:
    for i, arg in enumerate(call.args):
        if i > 0:
            stream.write(" ")
        stream.write(render(evaluate_fn(arg, env)))


def _prompt_and_read(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> str:
    _write_args(call, env, evaluate_fn, sys.stdout)
    sys.stdout.write(" ")
    sys.stdout.flush()
    try:
        return sys.stdin.readline()
    except UnicodeDecodeError as err:
        raise fatal(f"Cannot decode standard input: {err.reason}", call.where) from None


def _single_arg(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    if len(call.args) != 1:
        raise wrong_arg_count(call.where, len(call.args), 1)
    return evaluate_fn(call.args[0], env)


# -------------------------------
# Output
# -------------------------------
def print_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    """Write the arguments separated by single spaces."""
    _write_args(call, env, evaluate_fn, sys.stdout)
    return Nil


def println_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    """Like print, followed by a newline."""
    _write_args(call, env, evaluate_fn, sys.stdout)
    sys.stdout.write("\n")
    return Nil


# -------------------------------
# Strings
# -------------------------------
def len_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    """Byte length (UTF-8) of a single string argument."""
    value = _single_arg(call, env, evaluate_fn)
    if type_of(value) is not ValueType.STRING:
        raise wrong_type(call.where, value, "'len' function")
    return float(len(value.encode("utf-8")))


# -------------------------------
# Input
# -------------------------------
def readnum_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    """Print the prompt, read a line, return its leading number (0 if malformed)."""
    return parse_leading_float(_prompt_and_read(call, env, evaluate_fn))


def readstr_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    """Print the prompt, read a line, return it without its newline."""
    line = _prompt_and_read(call, env, evaluate_fn)
    if line.endswith("\n"):
        line = line[:-1]
    return line


# -------------------------------
# Termination
# -------------------------------
def panic_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    message = "".join(" " + render(evaluate_fn(arg, env)) for arg in call.args)
    sys.stdout.flush()
    click.echo(panic_header(call.where) + message, err=True, color=color_enabled())
    raise ProgramExit(1)


def exit_builtin(call: Call, env: Environment, evaluate_fn: EvaluatorFn) -> QuillValue:
    value = _single_arg(call, env, evaluate_fn)
    if type_of(value) is not ValueType.NUMBER:
        raise wrong_type(call.where, value, "'exit' function")
    if not math.isfinite(value):
        raise fatal(f"exit status must be finite, got {render(value)}", call.where)
    sys.stdout.flush()
    raise ProgramExit(int(value))


BUILTINS: dict[str, BuiltinFn] = {
    "println": println_builtin,
    "print": print_builtin,
    "len": len_builtin,
    "readnum": readnum_builtin,
    "readstr": readstr_builtin,
    "panic": panic_builtin,
    "exit": exit_builtin,
}


def lookup_builtin(name: str) -> Optional[BuiltinFn]:
    return BUILTINS.get(name)
