# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

r"""
Public expression surface.

    names = named_vars(r"(?P<M>\d+)x(?P<N>\d+)")
    expr = compile_expr("-math.Hypot(M+N, M-N)", names)
    eval_expr(expr, {"M": 3.5, "N": 0.5})  # -5.0
"""

from ..core.config import CompilerConfig
from ..core.types import Bindings, VariableSet
from ..engine.compiler import compile_expression
from ..engine.funcs import FunctionRegistry
from ..engine.program import CompiledExpression, CompiledSlice
from ..engine.slices import compile_slice_literal

__all__ = ["CompiledExpression", "CompiledSlice", "compile_expr", "compile_slice", "eval_expr"]


def compile_expr(
    source: str,
    variables: VariableSet,
    *,
    functions: FunctionRegistry | None = None,
    config: CompilerConfig | None = None,
) -> CompiledExpression:
    """
    Compile an infix expression over `variables`.

    Raises ExprSyntaxError for malformed text and UnknownVariableError for
    identifiers that are neither functions nor members of `variables`.
    """
    return compile_expression(source, variables, functions=functions, config=config)


def compile_slice(
    source: str,
    variables: VariableSet,
    *,
    functions: FunctionRegistry | None = None,
    config: CompilerConfig | None = None,
) -> CompiledSlice:
    """
    Compile a `float64{e1, e2, ...}` literal into independently evaluable expressions.

    Raises TypeMismatchError when the text is a well-formed scalar expression
    rather than a slice literal, plus the errors of `compile_expr`.
    """
    return compile_slice_literal(source, variables, functions=functions, config=config)


def eval_expr(expr: CompiledExpression, bindings: Bindings | None = None) -> float:
    """Evaluate a precompiled expression; `bindings` must cover `expr.variables`."""
    return expr.evaluate(bindings)
