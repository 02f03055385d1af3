# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Tokenizer for arithmetic expressions.

Tokens are produced lazily and in source order; each carries its 1-based line
and column so the parser can report errors the way Go's scanner does
("1:3: expected operand, found ')'").

Lexical grammar:
  number   := digits [ "." digits? ] [ exponent ] | "." digits [ exponent ]
  ident    := [A-Za-z_][A-Za-z0-9_]*
  funcname := ident { "." ident }   when followed by "("
  op       := "+" | "-" | "*" | "/"
  punct    := "(" | ")" | "," | "{" | "}"
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ..api.errors import ExprSyntaxError

__all__ = ["Token", "tokenize"]

# token kinds
NUMBER = "NUMBER"
IDENT = "IDENT"
FUNC = "FUNC"
OP = "OP"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
EOF = "EOF"

_TOKEN_SPEC = [
    ("NEWLINE", r"\n"),
    ("WS", r"[ \t\r]+"),
    ("NUMBER", r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"),
    ("NAME", r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*"),
    ("OP", r"[-+*/]"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("COMMA", r","),
    ("LBRACE", r"\{"),
    ("RBRACE", r"\}"),
]
_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC))
_CALL_AHEAD = re.compile(r"[ \t\r\n]*\(")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    column: int

    def describe(self) -> str:
        """How the token is quoted in error messages."""
        return "'EOF'" if self.kind == EOF else f"'{self.text}'"


def tokenize(source: str) -> Iterator[Token]:
    """
    Yield tokens for `source`, finishing with a single EOF token.

    Raises ExprSyntaxError on the first character that starts no token.
    """
    pos = 0
    line = 1
    line_start = 0
    while pos < len(source):
        m = _TOKEN_RE.match(source, pos)
        col = pos - line_start + 1
        if not m:
            raise ExprSyntaxError(line, col, f"illegal character {source[pos]!r}")
        kind = m.lastgroup or ""
        text = m.group()
        pos = m.end()
        if kind == "NEWLINE":
            line += 1
            line_start = pos
            continue
        if kind == "WS":
            continue
        if kind == "NAME":
            if _CALL_AHEAD.match(source, pos):
                kind = FUNC
            elif "." in text:
                raise ExprSyntaxError(line, col, f"expected '(' after qualified name '{text}'")
            else:
                kind = IDENT
        yield Token(kind, text, line, col)
    yield Token(EOF, "", line, pos - line_start + 1)
