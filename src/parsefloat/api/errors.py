# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Error taxonomy for the parsefloat public API.

Compile errors (syntax, unknown variable, type mismatch) are terminal for the
compile call: no partially built expression is ever returned alongside them.
Evaluation itself never fails for a well-formed call; the only evaluation-time
error signals a caller contract violation (missing binding).
"""


class ParseFloatError(Exception):
    """Base class for all parsefloat errors."""

    ...


class ExpressionError(ParseFloatError, ValueError):
    """The source text could not be compiled into an expression."""

    ...


class ExprSyntaxError(ExpressionError):
    """
    Malformed token stream: unbalanced parentheses, missing operand, unexpected
    token, unknown function or wrong function arity.

    Rendered as "<line>:<column>: <message>" with 1-based positions.
    """

    def __init__(self, line: int, column: int, message: str) -> None:
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{line}:{column}: {message}")


class UnknownVariableError(ExpressionError):
    """A referenced identifier is neither a function nor a known variable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown variable: {name}")


class TypeMismatchError(ExpressionError):
    """Slice compilation got text that is not wrapped as `<type>{...}`."""

    def __init__(self, source: str, elem_type: str) -> None:
        self.source = source
        self.elem_type = elem_type
        super().__init__(f"expression {source} is not a []{elem_type}")


class UnboundVariableError(ParseFloatError, LookupError):
    """
    Evaluation bindings do not contain a variable the program references.

    Compilation already checked names against the known variable set, so this
    is a caller programming error rather than a recoverable condition.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no binding for variable {name!r}")
