# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

r"""
Operator-precedence (shunting-yard) parser producing RPN programs.

Grammar, loosest binding first:
  expr     := term { ("+" | "-") term }*          left-associative
  term     := unary { ("*" | "/") unary }*        left-associative
  unary    := { "+" | "-" } primary
  primary  := number | variable | "(" expr ")" | funcname "(" expr [ "," expr ] ")"

A "+"/"-" is unary at the start of an expression and right after another
operator, "(" or ","; everywhere else it is binary. Function arity is fixed by
the function registry.

Parsing is purely syntactic; checking identifiers against the known variable
set happens afterwards (see `check_variables`), so syntax errors always win.
"""

from collections.abc import Collection, Iterator
from dataclasses import dataclass

from ..api.errors import ExprSyntaxError, UnknownVariableError
from . import instructions as ins
from .funcs import FunctionRegistry
from .instructions import Instruction, OpKind
from .lexer import COMMA, EOF, FUNC, IDENT, LPAREN, NUMBER, OP, RPAREN, Token

__all__ = ["TokenStream", "check_variables", "parse_program"]

_BINARY_PREC = {"+": 1, "-": 1, "*": 2, "/": 2}
_UNARY_PREC = 3


class TokenStream:
    """One-token lookahead over the lazy tokenizer output."""

    def __init__(self, tokens: Iterator[Token]):
        self._it = tokens
        self._peeked: Token | None = None

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = next(self._it)
        return self._peeked

    def next(self) -> Token:
        t = self.peek()
        if t.kind != EOF:
            self._peeked = None
        return t

    def expect(self, kind: str, what: str) -> Token:
        t = self.next()
        if t.kind != kind:
            raise ExprSyntaxError(t.line, t.column, f"expected {what}, found {t.describe()}")
        return t


@dataclass
class _Frame:
    """Operator-stack entry: a pending operator, or an open "(" / call marker."""

    kind: str  # "op" | "group" | "call"
    tok: Token
    instr: Instruction | None = None
    prec: int = 0
    args: int = 1


def parse_program(
    stream: TokenStream,
    fns: FunctionRegistry,
    *,
    stop: Collection[str] = (EOF,),
) -> tuple[Instruction, ...]:
    """
    Parse one expression from `stream` into postfix order.

    Parsing ends at a token of a kind in `stop` met outside any parentheses;
    that token is left in the stream. Raises ExprSyntaxError on malformed input.
    """
    out: list[Instruction] = []
    stack: list[_Frame] = []
    expect_operand = True

    def pop_to_marker() -> _Frame | None:
        while stack and stack[-1].kind == "op":
            out.append(stack.pop().instr)
        return stack[-1] if stack else None

    while True:
        tok = stream.peek()

        if expect_operand:
            stream.next()
            if tok.kind == NUMBER:
                out.append(ins.number(tok.text))
                expect_operand = False
            elif tok.kind == IDENT:
                out.append(ins.variable(tok.text))
                expect_operand = False
            elif tok.kind == FUNC:
                if tok.text not in fns:
                    raise ExprSyntaxError(tok.line, tok.column, f"unknown function '{tok.text}'")
                stream.expect(LPAREN, "'('")
                stack.append(_Frame("call", tok))
            elif tok.kind == LPAREN:
                stack.append(_Frame("group", tok))
            elif tok.kind == OP and tok.text in "+-":
                stack.append(_Frame("op", tok, ins.unary_op(tok.text), _UNARY_PREC))
            else:
                raise ExprSyntaxError(tok.line, tok.column, f"expected operand, found {tok.describe()}")
            continue

        if tok.kind == OP:
            stream.next()
            prec = _BINARY_PREC[tok.text]
            while stack and stack[-1].kind == "op" and stack[-1].prec >= prec:
                out.append(stack.pop().instr)
            stack.append(_Frame("op", tok, ins.binary_op(tok.text), prec))
            expect_operand = True
        elif tok.kind == RPAREN:
            frame = pop_to_marker()
            if frame is None:
                raise ExprSyntaxError(tok.line, tok.column, f"unexpected {tok.describe()}")
            stream.next()
            stack.pop()
            if frame.kind == "call":
                spec = fns.get(frame.tok.text)
                if frame.args != spec.arity:
                    raise ExprSyntaxError(
                        frame.tok.line,
                        frame.tok.column,
                        f"{spec.name} expects {spec.arity} argument(s), found {frame.args}",
                    )
                out.append(ins.func(spec.name, spec.arity, spec.fn))
        elif tok.kind == COMMA and stack and any(f.kind != "op" for f in stack):
            frame = pop_to_marker()
            if frame.kind != "call":
                raise ExprSyntaxError(tok.line, tok.column, f"expected ')', found {tok.describe()}")
            stream.next()
            frame.args += 1
            expect_operand = True
        elif tok.kind in stop:
            frame = pop_to_marker()
            if frame is not None:
                raise ExprSyntaxError(tok.line, tok.column, f"expected ')', found {tok.describe()}")
            break
        else:
            if any(f.kind != "op" for f in stack):
                raise ExprSyntaxError(tok.line, tok.column, f"expected ')', found {tok.describe()}")
            raise ExprSyntaxError(tok.line, tok.column, f"expected operator, found {tok.describe()}")

    return tuple(out)


def check_variables(program: tuple[Instruction, ...], known: Collection[str]) -> None:
    """Raise UnknownVariableError for the first variable (in source order) not in `known`."""
    for i in program:
        if i.kind is OpKind.VAR and i.text not in known:
            raise UnknownVariableError(i.text)
