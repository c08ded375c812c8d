"""
  Quill parser

Recursive descent over the token stream from quill.reader.lexer. Produces a
list of statement nodes (quill.reader.nodes). Binary precedence, loosest
first:

    = ++ -- ** //        (right associative, target must be a name)
    or
    and
    == /=
    > >= < <=
    + -
    * /
    unary + - not
    ^                    (right associative, binds tighter than unary)
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from quill.errors import QuillSyntaxError
from quill.reader.lexer import Token, lex, unescape
from quill.reader.nodes import (
    BinaryOp,
    Binding,
    Call,
    Constant,
    Defer,
    DoBlock,
    ExprStmt,
    For,
    FunctionLiteral,
    Identifier,
    If,
    IfBranch,
    Let,
    Node,
    Return,
    UnaryOp,
    While,
)
from quill.types.nil import Nil


ASSIGN_OPS = frozenset({"=", "++", "--", "**", "//"})

BINARY_LEVELS: list[frozenset[str]] = [
    frozenset({"or"}),
    frozenset({"and"}),
    frozenset({"==", "/="}),
    frozenset({">", ">=", "<", "<="}),
    frozenset({"+", "-"}),
    frozenset({"*", "/"}),
]

UNARY_OPS = frozenset({"+", "-", "not"})

# Tokens after which a bare `return` has no value
_STATEMENT_END = frozenset({"}", ";", "eof"})


def describe(tok: Token) -> str:
    if tok.kind == "eof":
        return "end of file"
    if tok.kind in ("name", "number", "string"):
        return f"{tok.kind} '{tok.text}'"
    return f"'{tok.text}'"


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self, offset: int = 0) -> Token:
        while len(self.buffer) <= offset:
            tok = next(self.tokens, None)
            if tok is None:
                # the lexer's eof token repeats forever once reached
                tok = self.buffer[-1] if self.buffer else Token("eof", "", None)
            self.buffer.append(tok)
        return self.buffer[offset]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind != "eof":
            self.buffer.pop(0)
        return tok

    def accept(self, kind: str) -> Optional[Token]:
        if self.peek().kind == kind:
            return self.advance()
        return None

    def expect(self, kind: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise QuillSyntaxError(f"Expected '{kind}', found {describe(tok)}", tok.where)
        return self.advance()

    # ------------------------
    # Statements
    # ------------------------
    def parse_all(self) -> Iterator[Node]:
        while self.peek().kind != "eof":
            yield self.parse_statement()

    def parse_block(self) -> list[Node]:
        self.expect("{")
        body: list[Node] = []
        while not self.accept("}"):
            if self.peek().kind == "eof":
                tok = self.peek()
                raise QuillSyntaxError("Unexpected end of file, expected '}'", tok.where)
            body.append(self.parse_statement())
        return body

    def parse_statement(self) -> Node:
        stmt = self.parse_simple_statement()
        self.accept(";")
        return stmt

    def parse_simple_statement(self) -> Node:
        """A statement without its optional trailing ';' (used in for headers)."""
        tok = self.peek()
        match tok.kind:
            case "let":
                return self._parse_let()
            case "if":
                return self._parse_if()
            case "while":
                self.advance()
                cond = self.parse_expr()
                return While(cond, self.parse_block(), where=tok.where)
            case "for":
                return self._parse_for()
            case "return":
                self.advance()
                if self.peek().kind in _STATEMENT_END:
                    value = Constant(Nil, where=tok.where)
                else:
                    value = self.parse_expr()
                return Return(value, where=tok.where)
            case "defer":
                self.advance()
                if self.peek().kind == "{":
                    body = self.parse_block()
                else:
                    body = [self.parse_simple_statement()]
                return Defer(body, where=tok.where)
            case _:
                expr = self.parse_expr()
                return ExprStmt(expr, where=expr.where)

    def _parse_let(self) -> Let:
        let_tok = self.expect("let")
        bindings: list[Binding] = []
        while True:
            name = self.expect("name")
            value = self.parse_expr() if self.accept("=") else None
            bindings.append(Binding(name.text, value, where=name.where))
            if not self.accept(","):
                break
        return Let(bindings, where=let_tok.where)

    def _parse_if(self) -> If:
        if_tok = self.expect("if")
        cond = self.parse_expr()
        branches = [IfBranch(cond, self.parse_block(), where=if_tok.where)]
        orelse = None
        while self.accept("else"):
            elif_tok = self.accept("if")
            if elif_tok is None:
                orelse = self.parse_block()
                break
            cond = self.parse_expr()
            branches.append(IfBranch(cond, self.parse_block(), where=elif_tok.where))
        return If(branches, orelse, where=if_tok.where)

    def _parse_for(self) -> For:
        for_tok = self.expect("for")
        self.expect("(")
        init = None if self.peek().kind == ";" else self.parse_simple_statement()
        self.expect(";")
        cond = self.parse_expr()
        self.expect(";")
        step = None if self.peek().kind == ")" else self.parse_simple_statement()
        self.expect(")")
        return For(init, cond, step, self.parse_block(), where=for_tok.where)

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expr(self) -> Node:
        left = self._parse_binary(0)
        tok = self.peek()
        if tok.kind in ASSIGN_OPS:
            self.advance()
            if not isinstance(left, Identifier):
                raise QuillSyntaxError(f"left side of '{tok.kind}' expected variable", tok.where)
            right = self.parse_expr()
            return BinaryOp(tok.kind, left, right, where=tok.where)
        return left

    def _parse_binary(self, level: int) -> Node:
        if level == len(BINARY_LEVELS):
            return self._parse_unary()
        left = self._parse_binary(level + 1)
        while self.peek().kind in BINARY_LEVELS[level]:
            tok = self.advance()
            right = self._parse_binary(level + 1)
            left = BinaryOp(tok.kind, left, right, where=tok.where)
        return left

    def _parse_unary(self) -> Node:
        tok = self.peek()
        if tok.kind in UNARY_OPS:
            self.advance()
            return UnaryOp(tok.kind, self._parse_unary(), where=tok.where)
        base = self._parse_primary()
        caret = self.accept("^")
        if caret is not None:
            return BinaryOp("^", base, self._parse_unary(), where=caret.where)
        return base

    def _parse_primary(self) -> Node:
        tok = self.advance()
        match tok.kind:
            case "number":
                return Constant(float(tok.text), where=tok.where)
            case "string":
                return Constant(unescape(tok.text, tok.where), where=tok.where)
            case "true":
                return Constant(True, where=tok.where)
            case "false":
                return Constant(False, where=tok.where)
            case "nil":
                return Constant(Nil, where=tok.where)
            case "name":
                if self.peek().kind == "(":
                    return Call(tok.text, self._parse_args(), where=tok.where)
                return Identifier(tok.text, where=tok.where)
            case "(":
                expr = self.parse_expr()
                self.expect(")")
                return expr
            case "do":
                return DoBlock(self.parse_block(), where=tok.where)
            case "fun":
                params = self._parse_params()
                return FunctionLiteral(params, self.parse_block(), where=tok.where)
        raise QuillSyntaxError(f"Unexpected {describe(tok)}", tok.where)

    def _parse_args(self) -> list[Node]:
        self.expect("(")
        args: list[Node] = []
        if self.accept(")"):
            return args
        while True:
            args.append(self.parse_expr())
            if self.accept(")"):
                return args
            self.expect(",")

    def _parse_params(self) -> list[str]:
        self.expect("(")
        params: list[str] = []
        if self.accept(")"):
            return params
        while True:
            params.append(self.expect("name").text)
            if self.accept(")"):
                return params
            self.expect(",")


def parse(source: str, path: str = "<input>") -> list[Node]:
    """Parse a whole program into its statement list."""
    stream = TokenStream(lex(source, path))
    try:
        return list(stream.parse_all())
    except RecursionError:
        raise QuillSyntaxError("Expression nested too deeply", stream.peek().where) from None
