# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
parsefloat public API.

Re-exports the compile/evaluate entry points, the error taxonomy, and the
regex helpers used to derive variable names and bindings.
"""

# Errors
from .errors import (
    ExpressionError,
    ExprSyntaxError,
    ParseFloatError,
    TypeMismatchError,
    UnboundVariableError,
    UnknownVariableError,
)

# Expressions
from .expr import CompiledExpression, CompiledSlice, compile_expr, compile_slice, eval_expr

# Regex helpers
from .names import match_vars, named_vars

__all__ = [
    "CompiledExpression",
    "CompiledSlice",
    "ExprSyntaxError",
    "ExpressionError",
    "ParseFloatError",
    "TypeMismatchError",
    "UnboundVariableError",
    "UnknownVariableError",
    "compile_expr",
    "compile_slice",
    "eval_expr",
    "match_vars",
    "named_vars",
]
