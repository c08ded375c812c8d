"""Runtime environment for Quill.

The Environment is a stack of scopes, one per active block. Each scope owns
an ordered variable table and an ordered list of deferred statements. Frame
objects are pooled by depth: the Scope created the first time a depth is
reached is cleared and reused by every later block at that depth.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Optional

from quill import QuillValue, ExecutorFn
from quill.config import get_max_nest
from quill.errors import (
    QuillControlFlowError,
    QuillInternalError,
    QuillNestingError,
    QuillRedeclarationError,
)

logger = logging.getLogger(__name__)


class Variable:
    """A named slot. Assignment and compound operators write through it."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: QuillValue):
        self.name: str = name
        self.value: QuillValue = value

    def __repr__(self) -> str:
        return f"Variable({self.name!r}, {self.value!r})"


class Scope:
    """Variables and deferred statements of one block."""

    __slots__ = ("vars", "defers")

    def __init__(self):
        self.vars: list[Variable] = []
        self.defers: list = []

    def reset(self) -> None:
        self.vars.clear()
        self.defers.clear()

    def find(self, name: str) -> Optional[Variable]:
        for var in self.vars:
            if var.name == name:
                return var
        return None


class Environment:
    """Bounded stack of scopes plus the count of active return boundaries."""

    __slots__ = ("max_depth", "depth", "boundaries", "_frames")

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth: int = max_depth if max_depth is not None else get_max_nest()
        self.depth: int = 0
        # Function calls and `do` blocks currently able to absorb a `return`.
        self.boundaries: int = 0
        self._frames: list[Scope] = []

    @property
    def scope(self) -> Scope:
        """The innermost live scope."""
        if self.depth == 0:
            raise QuillInternalError("No active scope")
        return self._frames[self.depth - 1]

    @property
    def pooled(self) -> int:
        """Number of frame objects allocated so far."""
        return len(self._frames)

    def begin(self, where=None) -> Scope:
        """Enter a new block."""
        if self.depth >= self.max_depth:
            raise QuillNestingError(
                f"Maximum nesting depth of {self.max_depth} exceeded", where
            )
        if self.depth == len(self._frames):
            self._frames.append(Scope())
            logger.debug("frame pool grown to %d", len(self._frames))
        else:
            self._frames[self.depth].reset()
        self.depth += 1
        return self._frames[self.depth - 1]

    def end(self, execute_fn: ExecutorFn) -> None:
        """Leave the innermost block.

        Deferred statements run last-registered first, while the scope is
        still live, so they see the variables of the block being left.
        """
        scope = self.scope
        pending = list(scope.defers)
        for stmt in reversed(pending):
            signal = execute_fn(stmt.body, self)
            if signal is not None:
                raise QuillControlFlowError("Unexpected return in deferred statement", signal.where)
        self.depth -= 1

    def declare(self, name: str, value: QuillValue, where=None) -> Variable:
        """Bind `name` in the innermost scope.

        Raises QuillRedeclarationError if the name is already live there.
        """
        scope = self.scope
        if scope.find(name) is not None:
            raise QuillRedeclarationError(f"Variable '{name}' redeclared", where)
        var = Variable(name, value)
        scope.vars.append(var)
        return var

    def is_declared_here(self, name: str) -> bool:
        return self.scope.find(name) is not None

    def lookup(self, name: str) -> Optional[Variable]:
        """Find the innermost live variable called `name`, or None."""
        for index in range(self.depth - 1, -1, -1):
            var = self._frames[index].find(name)
            if var is not None:
                return var
        return None

    def defer(self, stmt) -> None:
        """Register `stmt` to run when the innermost scope ends."""
        self.scope.defers.append(stmt)

    def enter_boundary(self) -> None:
        self.boundaries += 1

    def leave_boundary(self) -> None:
        self.boundaries -= 1

    def _write_scope(self, scope: Scope, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{var.name}: {var.value!r}" for var in scope.vars))
        buffer.write("}")

    def __str__(self) -> str:
        """Innermost scope only, with an indicator for enclosing ones."""
        with StringIO() as buffer:
            if self.depth == 0:
                buffer.write("{}")
            else:
                self._write_scope(self.scope, buffer)
                if self.depth > 1:
                    buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"<Environment depth={self.depth}: ")
            chain = []
            for index in range(self.depth - 1, -1, -1):
                scope_buf = StringIO()
                self._write_scope(self._frames[index], scope_buf)
                chain.append(scope_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
