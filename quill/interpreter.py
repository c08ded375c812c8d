from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from quill.config import get_max_nest
from quill.errors import QuillInternalError, QuillNestingError
from quill.evaluation.evaluator import execute
from quill.reader.nodes import Node
from quill.reader.parser import parse
from quill.types.environment import Environment

logger = logging.getLogger(__name__)

# Python frames granted to the evaluator: a fixed allowance for expression
# nesting plus a share per scope level, never above the ceiling.
BASE_FRAMES = 10_000
FRAMES_PER_SCOPE = 16
RECURSION_CEILING = 30_000


def recursion_budget(max_depth: int) -> int:
    return min(BASE_FRAMES + FRAMES_PER_SCOPE * max_depth, RECURSION_CEILING)


@contextmanager
def recursion_headroom(max_depth: int) -> Iterator[None]:
    """Raise the interpreter's recursion limit for the duration of a run."""
    previous = sys.getrecursionlimit()
    budget = recursion_budget(max_depth)
    if budget > previous:
        logger.debug("recursion limit raised from %d to %d", previous, budget)
        sys.setrecursionlimit(budget)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Interpreter:
    """
    Parses Quill source and runs it.
    Every program gets its own Environment; nothing carries over between runs.
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth if max_depth is not None else get_max_nest()

    def eval(self, code: str, path: str = "<input>") -> Environment:
        with recursion_headroom(self.max_depth):
            return self.run(parse(code, path))

    def run(self, program: list[Node]) -> Environment:
        """Execute a parsed program inside a top-level scope.

        Top-level defers run when the program finishes normally; `exit`,
        `panic` and fatal errors propagate before that happens. Running out
        of Python stack is reported as a QuillNestingError at the top-level
        statement being executed.
        """
        env = Environment(self.max_depth)
        logger.debug("running program: %d statements, max depth %d", len(program), env.max_depth)

        with recursion_headroom(self.max_depth):
            env.begin()
            for stmt in program:
                try:
                    signal = execute([stmt], env)
                except RecursionError:
                    raise QuillNestingError("Program nested too deeply", stmt.where) from None
                if signal is not None:
                    # `return` with no boundary is rejected before a signal exists
                    raise QuillInternalError("return escaped the top-level scope")
            try:
                env.end(execute)
            except RecursionError:
                raise QuillNestingError("Program nested too deeply") from None

        logger.debug("program finished, %d frames pooled", env.pooled)
        return env
