# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Compiler: source text -> CompiledExpression.

This pass performs:
- the optional source length guard from CompilerConfig
- tokenizing and shunting-yard parsing into an RPN program
- identifier validation against the caller's known variables

Syntax errors are reported before unknown variables.
"""

from collections.abc import Collection

from ..api.errors import ExprSyntaxError, ExpressionError
from ..core.config import DEFAULT_CONFIG, CompilerConfig
from ..core.log import get_logger, log_context
from .funcs import FunctionRegistry
from .instructions import Instruction
from .lexer import tokenize
from .parser import TokenStream, check_variables, parse_program
from .program import CompiledExpression

__all__ = ["check_length", "compile_expression", "parse_unchecked", "resolve_functions"]

log = get_logger("compiler")


def resolve_functions(functions: FunctionRegistry | None, config: CompilerConfig) -> FunctionRegistry:
    return functions if functions is not None else config.function_registry()


def check_length(source: str, config: CompilerConfig) -> None:
    if config.max_source_len and len(source) > config.max_source_len:
        raise ExprSyntaxError(1, 1, f"expression is longer than {config.max_source_len} characters")


def parse_unchecked(source: str, fns: FunctionRegistry) -> tuple[Instruction, ...]:
    """Parse `source` as one scalar expression without validating variable names."""
    return parse_program(TokenStream(tokenize(source)), fns)


def compile_expression(
    source: str,
    variables: Collection[str],
    *,
    functions: FunctionRegistry | None = None,
    config: CompilerConfig | None = None,
) -> CompiledExpression:
    """Compile a scalar expression; raises ExpressionError subclasses on failure."""
    cfg = config or DEFAULT_CONFIG
    fns = resolve_functions(functions, cfg)
    with log_context(source=source):
        try:
            check_length(source, cfg)
            program = parse_unchecked(source, fns)
            check_variables(program, variables)
        except ExpressionError as e:
            log.debug("expr.compile_failed", event="expr.compile_failed", source=source, error=str(e))
            raise
        expr = CompiledExpression(program, source)
        log.debug("expr.compiled", event="expr.compiled", source=source, size=len(program))
    return expr
