# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Slice literals: `<type>{e1, e2, ..., en}` -> CompiledSlice.

Each element is parsed by the scalar parser with the same function registry
and variable set. Empty literals and a trailing comma are accepted.

Literals of another element type are a type mismatch. Text that is not
wrapped at all is first parsed as a scalar expression (without checking
names), so malformed input still reports a syntax error and well-formed
scalar input raises TypeMismatchError.
"""

from collections.abc import Collection

from ..api.errors import ExpressionError, TypeMismatchError
from ..core.config import DEFAULT_CONFIG, CompilerConfig
from ..core.log import get_logger, log_context
from .compiler import check_length, parse_unchecked, resolve_functions
from .funcs import FunctionRegistry
from .instructions import Instruction
from .lexer import COMMA, EOF, IDENT, LBRACE, RBRACE, tokenize
from .parser import TokenStream, check_variables, parse_program
from .program import CompiledExpression, CompiledSlice

__all__ = ["compile_slice_literal"]

log = get_logger("slices")


def _wrapper_type(stream: TokenStream) -> str | None:
    """Consume `<type>` and return it when the text starts with `<type>{`."""
    head = stream.peek()
    if head.kind != IDENT:
        return None
    stream.next()
    return head.text if stream.peek().kind == LBRACE else None


def compile_slice_literal(
    source: str,
    variables: Collection[str],
    *,
    functions: FunctionRegistry | None = None,
    config: CompilerConfig | None = None,
) -> CompiledSlice:
    cfg = config or DEFAULT_CONFIG
    fns = resolve_functions(functions, cfg)
    with log_context(source=source):
        try:
            check_length(source, cfg)
            stream = TokenStream(tokenize(source))
            elem_type = _wrapper_type(stream)
            if elem_type is None:
                parse_unchecked(source, fns)
                raise TypeMismatchError(source, cfg.slice_type)
            if elem_type != cfg.slice_type:
                raise TypeMismatchError(source, cfg.slice_type)
            stream.next()  # "{"

            programs: list[tuple[Instruction, ...]] = []
            while stream.peek().kind != RBRACE:
                with log_context(element=len(programs)):
                    programs.append(parse_program(stream, fns, stop=(COMMA, RBRACE)))
                if stream.peek().kind == COMMA:
                    stream.next()
                else:
                    break
            stream.expect(RBRACE, "'}'")
            stream.expect(EOF, "'EOF'")

            # names are checked only once the whole literal is known to be well formed
            for i, program in enumerate(programs):
                with log_context(element=i):
                    check_variables(program, variables)
        except ExpressionError as e:
            log.debug("slice.compile_failed", event="slice.compile_failed", source=source, error=str(e))
            raise

        out = CompiledSlice([CompiledExpression(p) for p in programs], cfg.slice_type, source)
        log.debug("slice.compiled", event="slice.compiled", source=source, elements=len(out))
    return out
