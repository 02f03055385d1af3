# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

r"""
Variable names and bindings from regular expressions with named groups.

Callers typically describe file names such as "bench-64-3.txt" with a pattern
like r"(?P<N>\d+)-\d+", compile expressions over the group names, then bind
each file's captured numbers at evaluation time.
"""

import re

__all__ = ["match_vars", "named_vars"]

Pattern = str | re.Pattern[str]


def _compile(pattern: Pattern) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def named_vars(pattern: Pattern) -> frozenset[str]:
    """Return the names of the named capture groups in `pattern`."""
    return frozenset(_compile(pattern).groupindex)


def match_vars(pattern: Pattern, text: str) -> dict[str, float] | None:
    """
    Search `text` with `pattern` and return its named groups as floats.

    Returns None when the pattern does not match. Groups that did not take
    part in the match are left out; a captured value that is not a number
    raises ValueError.
    """
    m = _compile(pattern).search(text)
    if m is None:
        return None
    out: dict[str, float] = {}
    for name, value in m.groupdict().items():
        if value is None:
            continue
        try:
            out[name] = float(value)
        except ValueError as e:
            raise ValueError(f"group {name!r} captured {value!r}, which is not a number") from e
    return out
