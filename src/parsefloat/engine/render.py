# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Canonical infix rendering of RPN programs.

Mirrors evaluation but builds strings: each stack entry is (text, precedence).
A child is parenthesized only when its own top-level operator binds looser than
its position under the parent requires, so "N*N", "+M/N" and
"-math.Hypot(M+N, M-N)" render exactly as written.
"""

from collections.abc import Sequence

from .instructions import Instruction, OpKind

__all__ = ["render"]

# binding strength of the top-level construct of a rendered fragment
PREC_ADD = 1
PREC_MUL = 2
PREC_UNARY = 3
PREC_ATOM = 4

BINARY_PREC = {"+": PREC_ADD, "-": PREC_ADD, "*": PREC_MUL, "/": PREC_MUL}


def _wrap(text: str, prec: int, need: int) -> str:
    return f"({text})" if prec < need else text


def render(program: Sequence[Instruction]) -> str:
    stack: list[tuple[str, int]] = []
    for ins in program:
        k = ins.kind
        if k is OpKind.NUMBER or k is OpKind.VAR:
            stack.append((ins.text, PREC_ATOM))
        elif k is OpKind.BINARY_OP:
            rt, rp = stack.pop()
            lt, lp = stack.pop()
            p = BINARY_PREC[ins.text]
            # left-associative: an equal-precedence right child keeps its parens
            stack.append((_wrap(lt, lp, p) + ins.text + _wrap(rt, rp, p + 1), p))
        elif k is OpKind.UNARY_OP:
            t, p = stack.pop()
            stack.append((ins.text[1:] + _wrap(t, p, PREC_UNARY), PREC_UNARY))
        elif k is OpKind.UNARY_FUNC:
            t, _ = stack.pop()
            stack.append((f"{ins.text}({t})", PREC_ATOM))
        elif k is OpKind.BINARY_FUNC:
            bt, _ = stack.pop()
            at, _ = stack.pop()
            stack.append((f"{ins.text}({at}, {bt})", PREC_ATOM))
        else:  # pragma: no cover - OpKind is closed
            raise AssertionError(f"unsupported instruction kind: {k}")
    return stack[-1][0]
