# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Stack machine executing RPN programs.

Arithmetic is plain IEEE-754 double precision. Division by zero yields +/-inf
or NaN instead of raising, so a program that compiled always evaluates.
"""

import math
import operator
from collections.abc import Sequence

from ..api.errors import UnboundVariableError
from ..core.types import Bindings
from .instructions import Instruction, OpKind

__all__ = ["run"]


def _div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


_BINARY = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _div,
}

_UNARY = {
    "u+": operator.pos,
    "u-": operator.neg,
}


def run(program: Sequence[Instruction], bindings: Bindings | None) -> float:
    """
    Execute `program` against `bindings` and return the single value left on the stack.

    The second value popped for a binary instruction is its left operand.
    """
    env = bindings if bindings is not None else {}
    stack: list[float] = []
    push = stack.append
    pop = stack.pop
    for ins in program:
        k = ins.kind
        if k is OpKind.NUMBER:
            push(ins.value)
        elif k is OpKind.VAR:
            try:
                push(float(env[ins.text]))
            except KeyError:
                raise UnboundVariableError(ins.text) from None
        elif k is OpKind.BINARY_OP:
            b = pop()
            push(_BINARY[ins.text](pop(), b))
        elif k is OpKind.UNARY_OP:
            push(_UNARY[ins.text](pop()))
        elif k is OpKind.UNARY_FUNC:
            push(ins.fn(pop()))
        elif k is OpKind.BINARY_FUNC:
            b = pop()
            push(ins.fn(pop(), b))
        else:  # pragma: no cover - OpKind is closed
            raise AssertionError(f"unsupported instruction kind: {k}")
    assert len(stack) == 1, "malformed program"
    return stack[0]
