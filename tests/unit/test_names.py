from __future__ import annotations

import re

import pytest

from parsefloat.api import compile_expr, match_vars, named_vars

pytestmark = [pytest.mark.unit, pytest.mark.api]


def test_named_vars_accepts_strings_and_compiled_patterns():
    assert named_vars(r"(?P<M>\d+)(?P<N>\d+)-\d+$") == frozenset({"M", "N"})
    assert named_vars(re.compile(r"(?P<N>\d+)-(\d+)")) == frozenset({"N"})
    assert named_vars(r"\d+") == frozenset()


def test_match_vars_binds_group_values():
    assert match_vars(r"(?P<N>\d+)-\d+$", "bench-64-3") == {"N": 64.0}
    assert match_vars(r"n(?P<N>[\d.]+)", "run-n2.5") == {"N": 2.5}


def test_match_vars_skips_groups_that_did_not_participate():
    assert match_vars(r"(?P<A>\d+)|(?P<B>x)", "12") == {"A": 12.0}


def test_match_vars_without_match():
    assert match_vars(r"(?P<N>\d+)", "none") is None


def test_match_vars_rejects_non_numeric_capture():
    with pytest.raises(ValueError, match="'W'"):
        match_vars(r"(?P<W>[a-z]+)", "abc")


def test_names_and_bindings_feed_the_compiler():
    pattern = r"size(?P<N>\d+)_k(?P<K>\d+)"
    expr = compile_expr("N*math.Log2(N)/K", named_vars(pattern))
    assert expr.evaluate(match_vars(pattern, "size1024_k2.txt")) == 5120.0
