"""
  Quill lexer

- Single master regex, one alternative per token class
- Yields Token(kind, text, where) lazily; `where` is 1-based row/column
- Keywords and operators use their own text as `kind`:

    - let, if, while, ... -> kind "let", "if", "while", ...
    - ==, ++, (, ...      -> kind "==", "++", "(", ...
    - literals            -> kind "number" / "string" (text is the raw lexeme)
    - names               -> kind "name"
    - end of input        -> kind "eof"
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from quill.errors import QuillSyntaxError
from quill.reader.nodes import Location


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>\#[^\n]*)"  # single-line comment
    r"|(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"  # 12, 1.5, .5, 2e10
    r'|(?P<string>"(?:\\.|[^\\"\n])*")'  # double-quoted, single line
    r'|(?P<bad_string>"[^\n]*)'  # opening quote with no closing one
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>==|/=|>=|<=|\+\+|--|\*\*|//|[=<>+\-*/^(){},;])"  # longest first
)

KEYWORDS = frozenset(
    {
        "let", "if", "else", "while", "for", "return", "defer",
        "do", "fun", "true", "false", "nil", "and", "or", "not",
    }
)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
}

_ESCAPE_RE = re.compile(r"\\(.)")


class Token(NamedTuple):
    kind: str
    text: str
    where: Location


def unescape(lexeme: str, where: Location) -> str:
    """Decode the body of a string lexeme (quotes included)."""

    def replace(match: re.Match) -> str:
        char = match.group(1)
        if char not in ESCAPES:
            raise QuillSyntaxError(f"Unknown escape sequence '\\{char}'", where)
        return ESCAPES[char]

    return _ESCAPE_RE.sub(replace, lexeme[1:-1])


def lex(source: str, path: str = "<input>") -> Iterator[Token]:
    """Token generator; always ends with a single "eof" token."""
    pos = 0
    row = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        where = Location(path, row, pos - line_start + 1)
        if not m:
            raise QuillSyntaxError(f"Unexpected character {source[pos]!r}", where)

        kind = m.lastgroup
        text = m.group(kind)

        if kind == "bad_string":
            raise QuillSyntaxError("Unterminated string", where)
        if kind == "name":
            yield Token(text if text in KEYWORDS else "name", text, where)
        elif kind == "op":
            yield Token(text, text, where)
        elif kind in ("number", "string"):
            yield Token(kind, text, where)

        newlines = text.count("\n")
        if newlines:
            row += newlines
            line_start = pos + text.rindex("\n") + 1
        pos = m.end()

    yield Token("eof", "", Location(path, row, pos - line_start + 1))
