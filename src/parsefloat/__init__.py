from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("parsefloat")
except PackageNotFoundError:  # pragma: no cover
    # running from a source checkout without installing
    __version__ = "0.0.0"

from .api import (
    CompiledExpression,
    CompiledSlice,
    ExpressionError,
    ExprSyntaxError,
    TypeMismatchError,
    UnknownVariableError,
    compile_expr,
    compile_slice,
    eval_expr,
    named_vars,
)
from .core.config import CompilerConfig

__all__ = [
    "CompiledExpression",
    "CompiledSlice",
    "CompilerConfig",
    "ExprSyntaxError",
    "ExpressionError",
    "TypeMismatchError",
    "UnknownVariableError",
    "__version__",
    "compile_expr",
    "compile_slice",
    "eval_expr",
    "named_vars",
]
