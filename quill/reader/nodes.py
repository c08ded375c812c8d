"""Syntax tree produced by the parser and walked by the evaluator.

Every node carries `where`, the source location used in diagnostics. It is
excluded from equality so trees can be compared structurally in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Location:
    path: str
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.path}:{self.row}:{self.col}"


@dataclass
class Node:
    where: Optional[Location] = field(default=None, compare=False, repr=False, kw_only=True)


# --- Expressions ---

@dataclass
class Constant(Node):
    value: Any


@dataclass
class Identifier(Node):
    name: str


@dataclass
class FunctionLiteral(Node):
    params: list[str]
    body: list[Node]


@dataclass
class DoBlock(Node):
    body: list[Node]


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class Call(Node):
    name: str
    args: list[Node] = field(default_factory=list)


# --- Statements ---

@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class Binding(Node):
    name: str
    value: Optional[Node] = None


@dataclass
class Let(Node):
    bindings: list[Binding]


@dataclass
class IfBranch(Node):
    cond: Node
    body: list[Node]


@dataclass
class If(Node):
    branches: list[IfBranch]
    orelse: Optional[list[Node]] = None


@dataclass
class While(Node):
    cond: Node
    body: list[Node]


@dataclass
class For(Node):
    init: Optional[Node]
    cond: Node
    step: Optional[Node]
    body: list[Node]


@dataclass
class Return(Node):
    value: Node


@dataclass
class Defer(Node):
    body: list[Node]
