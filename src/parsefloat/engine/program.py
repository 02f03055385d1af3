# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Compiled expression values.

`CompiledExpression` owns an immutable RPN program and is safe to evaluate from
many threads at once: evaluation only touches a call-local stack and the
caller's (read-only) bindings. `CompiledSlice` is an ordered, read-only
sequence of compiled expressions, index = position in the source literal.
"""

from collections.abc import Iterator, Sequence
from typing import overload

from pydantic import BaseModel, Field

from ..core.types import Bindings
from .evaluator import run
from .instructions import POPS, Instruction, OpKind
from .render import render

__all__ = ["CompiledExpression", "CompiledSlice", "ExpressionInfo", "SliceInfo"]


class ExpressionInfo(BaseModel):
    """Serializable summary of a compiled expression."""

    source: str
    text: str
    rpn: list[str]
    variables: list[str] = Field(default_factory=list)
    model_config = {"extra": "forbid", "frozen": True}


class SliceInfo(BaseModel):
    """Serializable summary of a compiled slice."""

    source: str
    text: str
    elem_type: str
    elements: list[ExpressionInfo] = Field(default_factory=list)
    model_config = {"extra": "forbid", "frozen": True}


def _check_stack_effect(program: Sequence[Instruction]) -> None:
    depth = 0
    for i in program:
        depth -= POPS[i.kind]
        if depth < 0:
            raise ValueError(f"program underflows the stack at {i.text!r}")
        depth += 1
    if depth != 1:
        raise ValueError(f"program leaves {depth} values on the stack, expected 1")


class CompiledExpression:
    """A compiled arithmetic expression; evaluate it with `evaluate(bindings)`."""

    __slots__ = ("_program", "_source", "_text")

    def __init__(self, program: Sequence[Instruction], source: str | None = None) -> None:
        prog = tuple(program)
        _check_stack_effect(prog)
        self._program = prog
        self._text = render(prog)
        self._source = self._text if source is None else source

    # --- introspection

    @property
    def program(self) -> tuple[Instruction, ...]:
        return self._program

    @property
    def rpn(self) -> tuple[str, ...]:
        """Instruction strings in execution order, e.g. ("N", "N", "*")."""
        return tuple(str(i) for i in self._program)

    @property
    def source(self) -> str:
        return self._source

    @property
    def variables(self) -> frozenset[str]:
        """Variable names the program reads."""
        return frozenset(i.text for i in self._program if i.kind is OpKind.VAR)

    def describe(self) -> ExpressionInfo:
        return ExpressionInfo(
            source=self._source,
            text=self._text,
            rpn=list(self.rpn),
            variables=sorted(self.variables),
        )

    # --- evaluation

    def evaluate(self, bindings: Bindings | None = None) -> float:
        """
        Evaluate against `bindings`, which must bind every name in `variables`.

        Raises UnboundVariableError if a referenced name is missing.
        """
        return run(self._program, bindings)

    __call__ = evaluate

    # --- dunder

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"CompiledExpression({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledExpression):
            return NotImplemented
        return self._program == other._program

    def __hash__(self) -> int:
        return hash(self._program)


class CompiledSlice(Sequence[CompiledExpression]):
    """Ordered compiled elements of a `<type>{e1, e2, ...}` literal."""

    __slots__ = ("_elems", "_elem_type", "_source")

    def __init__(self, elems: Sequence[CompiledExpression], elem_type: str = "float64", source: str | None = None):
        self._elems = tuple(elems)
        self._elem_type = elem_type
        self._source = str(self) if source is None else source

    @property
    def elem_type(self) -> str:
        return self._elem_type

    @property
    def source(self) -> str:
        return self._source

    @property
    def variables(self) -> frozenset[str]:
        out: frozenset[str] = frozenset()
        for e in self._elems:
            out |= e.variables
        return out

    def evaluate(self, bindings: Bindings | None = None) -> list[float]:
        """Evaluate every element in order."""
        return [e.evaluate(bindings) for e in self._elems]

    __call__ = evaluate

    def describe(self) -> SliceInfo:
        return SliceInfo(
            source=self._source,
            text=str(self),
            elem_type=self._elem_type,
            elements=[e.describe() for e in self._elems],
        )

    @overload
    def __getitem__(self, index: int) -> CompiledExpression: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[CompiledExpression, ...]: ...

    def __getitem__(self, index):
        return self._elems[index]

    def __len__(self) -> int:
        return len(self._elems)

    def __iter__(self) -> Iterator[CompiledExpression]:
        return iter(self._elems)

    def __str__(self) -> str:
        return f"{self._elem_type}{{{', '.join(str(e) for e in self._elems)}}}"

    def __repr__(self) -> str:
        return f"CompiledSlice({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledSlice):
            return NotImplemented
        return self._elem_type == other._elem_type and self._elems == other._elems

    def __hash__(self) -> int:
        return hash((self._elem_type, self._elems))
