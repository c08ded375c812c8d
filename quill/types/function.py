"""Function value representation for Quill."""

from __future__ import annotations

from io import StringIO


class Function:
    """A first-class function value.

    Holds only a reference to the function literal that produced it. Nothing
    is captured: free names in the body are resolved against whatever scopes
    are live when the function is called.
    """

    __slots__ = ("node",)

    def __init__(self, node):
        self.node = node

    @property
    def params(self) -> list[str]:
        return self.node.params

    @property
    def body(self) -> list:
        return self.node.body

    def __eq__(self, other) -> bool:
        # Identity of the literal, not structural equality of two literals.
        return isinstance(other, Function) and self.node is other.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<function (")
            buffer.write(", ".join(self.params))
            buffer.write(")")
            if self.node.where is not None:
                buffer.write(f" at {self.node.where}")
            buffer.write(">")
            return buffer.getvalue()
