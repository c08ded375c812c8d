"""Halting diagnostics.

The evaluator never prints errors itself. It raises the QuillError built by
one of the constructors below, and the outermost caller (the CLI) hands the
error to `report`, which writes a location-tagged message to stderr.
"""

from __future__ import annotations

from typing import Optional

import click

from quill import QuillValue
from quill.errors import QuillArityError, QuillError, QuillTypeError, QuillUndefinedError
from quill.types.value import type_of


# -------------------------------
# Error constructors (raise the result)
# -------------------------------
def fatal(message: str, where=None) -> QuillError:
    return QuillError(message, where)


def wrong_type(where, value: QuillValue, context: str) -> QuillTypeError:
    return QuillTypeError(f"Unexpected type '{type_of(value)}' in {context}", where)


def undefined(where, name: str) -> QuillUndefinedError:
    return QuillUndefinedError(f"Undefined identifier '{name}'", where)


def wrong_arg_count(where, got: int, expected: int) -> QuillArityError:
    plural = "" if expected == 1 else "s"
    return QuillArityError(f"Expected {expected} argument{plural}, got {got}", where)


# -------------------------------
# Formatting
# -------------------------------
def _location_prefix(where) -> str:
    return click.style(f"{where}:", bold=True) + " " if where is not None else ""


def _source_excerpt(source: str, where) -> list[str]:
    lines = source.splitlines()
    if not (0 < where.row <= len(lines)):
        return []
    line = lines[where.row - 1].expandtabs(1)
    caret = " " * (where.col - 1) + click.style("^", fg="bright_red", bold=True)
    return [f"    {line}", f"    {caret}"]


def format_error(error: QuillError, source: Optional[str] = None) -> str:
    """`path:row:col: error: message`, plus the source line when known."""
    label = click.style("error:", fg="bright_red", bold=True)
    parts = [f"{_location_prefix(error.where)}{label} {error.message}"]
    if source is not None and error.where is not None:
        parts.extend(_source_excerpt(source, error.where))
    return "\n".join(parts)


def panic_header(where) -> str:
    return _location_prefix(where) + click.style("panic():", fg="bright_red")


def report(error: QuillError, source: Optional[str] = None, color: Optional[bool] = None) -> None:
    click.echo(format_error(error, source), err=True, color=color)
