# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Expression engine: tokenizer, shunting-yard parser, RPN evaluator and renderer.

Application code should go through `parsefloat.api`.
"""

from .compiler import compile_expression
from .funcs import FunctionRegistry, get_default_functions
from .program import CompiledExpression, CompiledSlice, ExpressionInfo, SliceInfo
from .slices import compile_slice_literal

__all__ = [
    "CompiledExpression",
    "CompiledSlice",
    "ExpressionInfo",
    "FunctionRegistry",
    "SliceInfo",
    "compile_expression",
    "compile_slice_literal",
    "get_default_functions",
]
