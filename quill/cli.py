"""Command line entry point: `quill FILE` or `quill -c CODE`."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import click

from quill import __version__
from quill.config import color_enabled
from quill.diagnostics import report
from quill.errors import QuillError
from quill.interpreter import Interpreter


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("script", required=False, type=click.File("r", encoding="utf-8"))
@click.option("-c", "--command", "code", type=str, help="Run CODE instead of a script file.")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum scope nesting depth (default: $QUILL_MAX_NEST or 64).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log interpreter activity to stderr.")
@click.version_option(__version__, prog_name="quill")
def main(script: Optional[TextIO], code: Optional[str], max_depth: Optional[int], verbose: bool):
    """Run a Quill program."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if (script is None) == (code is None):
        raise click.UsageError("Expected exactly one of SCRIPT or -c CODE.")

    if code is not None:
        source, path = code, "<command>"
    else:
        source, path = script.read(), script.name

    try:
        interpreter = Interpreter(max_depth=max_depth)
    except ValueError as err:
        raise click.ClickException(str(err)) from None

    try:
        interpreter.eval(source, path)
    except QuillError as err:
        sys.stdout.flush()
        report(err, source, color=color_enabled())
        sys.exit(1)


if __name__ == "__main__":
    main()
