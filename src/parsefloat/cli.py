#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# parsefloat command line: compile an expression (or a float64{...} slice) and evaluate it.
#
#   parsefloat "N*math.Log(N)" --var N=10
#   parsefloat "float64{N*N, N, 1.0}" --slice --pattern '(?P<N>\d+)-\d+$' --name bench-64-3
#   parsefloat --var M=3.5 --var N=0.5 --json -- "-math.Hypot(M+N, M-N)"

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from .api import ExpressionError, compile_expr, compile_slice, match_vars, named_vars
from .core.config import CompilerConfig
from .core.log import configure_from_env, get_logger

log = get_logger("cli")


def _parse_var(spec: str) -> tuple[str, float]:
    name, sep, raw = spec.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {spec!r}")
    try:
        return name.strip(), float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of {name.strip()!r} is not a number: {raw!r}") from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="parsefloat", description="Compile and evaluate arithmetic expressions.")
    ap.add_argument("expr", help="Expression text, e.g. 'N*math.Log(N)' or 'float64{N, 1.0}' with --slice")
    ap.add_argument(
        "--var",
        dest="vars",
        action="append",
        default=[],
        type=_parse_var,
        metavar="NAME=VALUE",
        help="Declare and bind a variable (repeatable)",
    )
    ap.add_argument("--pattern", help="Regex whose named groups declare variables")
    ap.add_argument("--name", help="Text matched against --pattern to bind its groups")
    ap.add_argument("--slice", action="store_true", help="Compile EXPR as a float64{...} literal")
    ap.add_argument("--rpn", action="store_true", help="Print the RPN program before the value")
    ap.add_argument("--json", action="store_true", help="Print a JSON description including the value(s)")
    ap.add_argument("--config", help="JSON file with compiler settings")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    configure_from_env()
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.name is not None and args.pattern is None:
        ap.error("--name requires --pattern")

    try:
        config = CompilerConfig.load(args.config)
    except ValueError as e:
        print(f"parsefloat: bad config: {e}", file=sys.stderr)
        return 2
    bindings: dict[str, float] = dict(args.vars)
    known = set(bindings)
    if args.pattern is not None:
        known |= named_vars(args.pattern)
        if args.name is not None:
            matched = match_vars(args.pattern, args.name)
            if matched is None:
                print(f"parsefloat: pattern does not match {args.name!r}", file=sys.stderr)
                return 2
            bindings.update(matched)

    try:
        if args.slice:
            compiled = compile_slice(args.expr, known, config=config)
        else:
            compiled = compile_expr(args.expr, known, config=config)
    except ExpressionError as e:
        print(f"parsefloat: {e}", file=sys.stderr)
        return 2

    missing = sorted(compiled.variables - bindings.keys())
    if missing:
        print(f"parsefloat: no value for {', '.join(missing)}", file=sys.stderr)
        return 2

    value = compiled.evaluate(bindings)
    log.debug("cli.evaluated", event="cli.evaluated", expr=args.expr, value=value)

    if args.json:
        info = compiled.describe().model_dump()
        info["value"] = value
        print(json.dumps(info, ensure_ascii=False))
        return 0

    if args.rpn:
        if args.slice:
            for e in compiled:
                print(" ".join(e.rpn))
        else:
            print(" ".join(compiled.rpn))
    if args.slice:
        print(" ".join(repr(v) for v in value))
    else:
        print(repr(value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
