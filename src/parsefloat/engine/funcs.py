# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Fixed-arity numeric function whitelist for the expression compiler.

Notes:
- Names follow Go's `math` package (math.Log, math.Hypot, ...) so expressions
  written for that ecosystem compile unchanged.
- Every function is pure and total over floats: domain errors and overflow
  produce IEEE-754 results (NaN, +/-inf) instead of raising.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

__all__ = ["FunctionRegistry", "FunctionSpec", "get_default_functions"]

Func = Callable[..., float]


@dataclass(frozen=True)
class FunctionSpec:
    name: str
    arity: int
    fn: Func


class FunctionRegistry:
    """Pluggable registry mapping a function name to its arity and implementation."""

    def __init__(self) -> None:
        self._fn: dict[str, FunctionSpec] = {}

    def register(self, name: str, arity: int, fn: Func) -> None:
        if not name or not callable(fn):
            raise ValueError("invalid function registration")
        if arity not in (1, 2):
            raise ValueError(f"function {name!r}: arity must be 1 or 2, got {arity}")
        # last-wins to allow test overrides
        self._fn[name] = FunctionSpec(name, arity, fn)

    def get(self, name: str) -> FunctionSpec:
        try:
            return self._fn[name]
        except KeyError:
            raise ValueError(f"function {name!r} is not allowed") from None

    def __contains__(self, name: object) -> bool:
        return name in self._fn

    def names(self) -> list[str]:
        return sorted(self._fn.keys())

    def restrict(self, names: Iterable[str]) -> FunctionRegistry:
        """Return a new registry holding only `names` (all must be registered)."""
        out = FunctionRegistry()
        for name in names:
            spec = self.get(name)
            out.register(spec.name, spec.arity, spec.fn)
        return out


# ---- IEEE-754 flavoured wrappers around `math`


def _log_family(fn: Func, pole: float = 0.0) -> Func:
    def _f(x: float) -> float:
        if x == pole:
            return -math.inf
        if x < pole:
            return math.nan
        return fn(x)

    return _f


def _exp_family(fn: Func) -> Func:
    def _f(x: float) -> float:
        try:
            return fn(x)
        except OverflowError:
            return math.inf

    return _f


def _trig(fn: Func) -> Func:
    def _f(x: float) -> float:
        if math.isinf(x):
            return math.nan
        return fn(x)

    return _f


def _rounding(fn: Callable[[float], int]) -> Func:
    def _f(x: float) -> float:
        if not math.isfinite(x) or x == 0:
            return x
        return math.copysign(float(fn(x)), x)

    return _f


def _sqrt(x: float) -> float:
    return math.nan if x < 0 else math.sqrt(x)


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except (ValueError, OverflowError):
        odd = y.is_integer() and abs(y) % 2 == 1
        if x == 0:
            # y < 0
            return math.copysign(math.inf, x) if odd else math.inf
        if x < 0 and not y.is_integer():
            return math.nan
        return -math.inf if x < 0 and odd else math.inf


def _max(x: float, y: float) -> float:
    if math.isnan(x) or math.isnan(y):
        return math.nan
    if x == 0 and y == 0:
        return x if math.copysign(1.0, x) > 0 else y
    return x if x > y else y


def _min(x: float, y: float) -> float:
    if math.isnan(x) or math.isnan(y):
        return math.nan
    if x == 0 and y == 0:
        return x if math.copysign(1.0, x) < 0 else y
    return x if x < y else y


def _mod(x: float, y: float) -> float:
    try:
        return math.fmod(x, y)
    except ValueError:
        return math.nan


def get_default_functions() -> FunctionRegistry:
    """Return a registry pre-populated with the built-in numeric functions."""
    reg = FunctionRegistry()
    reg.register("math.Abs", 1, math.fabs)
    reg.register("math.Ceil", 1, _rounding(math.ceil))
    reg.register("math.Floor", 1, _rounding(math.floor))
    reg.register("math.Trunc", 1, _rounding(math.trunc))
    reg.register("math.Sqrt", 1, _sqrt)
    reg.register("math.Cbrt", 1, math.cbrt)
    reg.register("math.Exp", 1, _exp_family(math.exp))
    reg.register("math.Exp2", 1, _exp_family(math.exp2))
    reg.register("math.Log", 1, _log_family(math.log))
    reg.register("math.Log2", 1, _log_family(math.log2))
    reg.register("math.Log10", 1, _log_family(math.log10))
    reg.register("math.Log1p", 1, _log_family(math.log1p, pole=-1.0))
    reg.register("math.Sin", 1, _trig(math.sin))
    reg.register("math.Cos", 1, _trig(math.cos))
    reg.register("math.Tan", 1, _trig(math.tan))
    reg.register("math.Hypot", 2, math.hypot)
    reg.register("math.Pow", 2, _pow)
    reg.register("math.Max", 2, _max)
    reg.register("math.Min", 2, _min)
    reg.register("math.Mod", 2, _mod)
    return reg
