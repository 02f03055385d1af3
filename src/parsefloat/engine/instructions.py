# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
RPN instruction set.

A program is a tuple of `Instruction`s in postfix order. Each instruction is a
tagged value: `kind` selects the variant and `text`/`value` carry its payload.

  kind          stack effect   text                value
  NUMBER        push 1         literal as written  parsed float
  VAR           push 1         variable name       -
  BINARY_OP     pop 2, push 1  + - * /             -
  UNARY_OP      pop 1, push 1  u+ u-               -
  UNARY_FUNC    pop 1, push 1  function name       -
  BINARY_FUNC   pop 2, push 1  function name       -
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

__all__ = ["Instruction", "OpKind", "binary_op", "func", "number", "unary_op", "variable"]


class OpKind(str, Enum):
    NUMBER = "NUMBER"
    VAR = "VAR"
    BINARY_OP = "BINARY_OP"
    UNARY_OP = "UNARY_OP"
    UNARY_FUNC = "UNARY_FUNC"
    BINARY_FUNC = "BINARY_FUNC"


# arity of each kind when executed on the operand stack
POPS: dict[OpKind, int] = {
    OpKind.NUMBER: 0,
    OpKind.VAR: 0,
    OpKind.BINARY_OP: 2,
    OpKind.UNARY_OP: 1,
    OpKind.UNARY_FUNC: 1,
    OpKind.BINARY_FUNC: 2,
}


@dataclass(frozen=True)
class Instruction:
    kind: OpKind
    text: str
    value: float = 0.0
    # resolved implementation for UNARY_FUNC / BINARY_FUNC
    fn: Callable[..., float] | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.text


def number(text: str) -> Instruction:
    return Instruction(OpKind.NUMBER, text, float(text))


def variable(name: str) -> Instruction:
    return Instruction(OpKind.VAR, name)


def binary_op(symbol: str) -> Instruction:
    return Instruction(OpKind.BINARY_OP, symbol)


def unary_op(symbol: str) -> Instruction:
    """`symbol` is the bare sign; the instruction text gets the "u" prefix."""
    return Instruction(OpKind.UNARY_OP, "u" + symbol)


def func(name: str, arity: int, fn: Callable[..., float]) -> Instruction:
    return Instruction(OpKind.UNARY_FUNC if arity == 1 else OpKind.BINARY_FUNC, name, fn=fn)
