from __future__ import annotations

import pytest

from parsefloat.api.errors import ExprSyntaxError, TypeMismatchError, UnknownVariableError
from parsefloat.core.config import CompilerConfig
from parsefloat.engine.slices import compile_slice_literal

pytestmark = [pytest.mark.unit, pytest.mark.engine]


def test_elements_keep_source_order():
    sl = compile_slice_literal("float64{N*N, N, 1.0}", {"N"})
    assert len(sl) == 3
    assert [str(e) for e in sl] == ["N*N", "N", "1.0"]
    assert sl[0].rpn == ("N", "N", "*")
    assert str(sl) == "float64{N*N, N, 1.0}"
    assert sl.source == "float64{N*N, N, 1.0}"


def test_commas_inside_calls_do_not_split_elements():
    sl = compile_slice_literal("float64{math.Hypot(M, N), M}", {"M", "N"})
    assert [str(e) for e in sl] == ["math.Hypot(M, N)", "M"]
    assert sl.evaluate({"M": 3, "N": 4}) == [5.0, 3.0]


def test_empty_and_trailing_comma():
    assert len(compile_slice_literal("float64{}", set())) == 0
    assert len(compile_slice_literal("float64{1.0, 2.0,}", set())) == 2
    assert compile_slice_literal(" float64 { 1 } ", set()).evaluate() == [1.0]


def test_variables_are_checked_per_element():
    with pytest.raises(UnknownVariableError, match="unknown variable: X"):
        compile_slice_literal("float64{N, X}", {"N"})


def test_syntax_error_in_later_element_wins_over_unknown_variable():
    with pytest.raises(ExprSyntaxError):
        compile_slice_literal("float64{X, (}", set())
    with pytest.raises(ExprSyntaxError):
        compile_slice_literal("float64{X, 1} 2", set())


@pytest.mark.parametrize(
    "source,message",
    [
        ("float64{1.0,,2.0}", "1:13: expected operand, found ','"),
        ("float64{(1.0}", "1:13: expected ')', found '}'"),
        ("float64{1.0", "1:12: expected operator, found 'EOF'"),
        ("float64{1.0} + 1", "1:14: expected 'EOF', found '+'"),
        ("float64{1.0 2.0}", "1:13: expected operator, found '2.0'"),
    ],
)
def test_malformed_literals(source, message):
    with pytest.raises(ExprSyntaxError) as ei:
        compile_slice_literal(source, set())
    assert str(ei.value) == message


@pytest.mark.parametrize("source", ["N + 1.0", "float64", "int{1}", "math.Log(N)"])
def test_scalar_text_is_a_type_mismatch(source):
    with pytest.raises(TypeMismatchError) as ei:
        compile_slice_literal(source, set())
    assert ei.value.elem_type == "float64"


def test_element_type_comes_from_config():
    cfg = CompilerConfig(slice_type="float32")
    sl = compile_slice_literal("float32{1.0}", set(), config=cfg)
    assert sl.elem_type == "float32"
    with pytest.raises(TypeMismatchError, match=r"is not a \[\]float32"):
        compile_slice_literal("float64{1.0}", set(), config=cfg)
