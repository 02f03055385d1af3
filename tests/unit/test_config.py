from __future__ import annotations

import json

import pytest

from parsefloat.api import ExprSyntaxError, compile_expr, compile_slice
from parsefloat.core.config import CompilerConfig

pytestmark = [pytest.mark.unit]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PARSEFLOAT_SLICE_TYPE", "PARSEFLOAT_MAX_SOURCE_LEN", "PARSEFLOAT_FUNCTIONS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = CompilerConfig.load()
    assert cfg == CompilerConfig()
    assert cfg.slice_type == "float64"
    assert cfg.max_source_len == 0
    assert cfg.functions is None


def test_file_then_env_then_overrides(tmp_path, monkeypatch):
    path = tmp_path / "parsefloat.json"
    path.write_text(json.dumps({"slice_type": "float32", "max_source_len": 10}), encoding="utf-8")
    monkeypatch.setenv("PARSEFLOAT_MAX_SOURCE_LEN", "20")
    monkeypatch.setenv("PARSEFLOAT_FUNCTIONS", "math.Log, math.Hypot")

    cfg = CompilerConfig.load(path, overrides={"slice_type": "real"})
    assert cfg.slice_type == "real"
    assert cfg.max_source_len == 20
    assert cfg.functions == ("math.Log", "math.Hypot")


def test_missing_file_keeps_defaults(tmp_path):
    assert CompilerConfig.load(tmp_path / "absent.json") == CompilerConfig()


@pytest.mark.parametrize(
    "kwargs",
    [{"slice_type": "[]float64"}, {"max_source_len": -1}, {"functions": ("math.Log", "")}],
)
def test_invalid_values_fail_fast(kwargs):
    with pytest.raises(ValueError):
        CompilerConfig(**kwargs)


def test_invalid_env_value(monkeypatch):
    monkeypatch.setenv("PARSEFLOAT_MAX_SOURCE_LEN", "lots")
    with pytest.raises(ValueError, match="PARSEFLOAT_MAX_SOURCE_LEN"):
        CompilerConfig.load()


def test_function_allowlist_restricts_compilation():
    cfg = CompilerConfig(functions=("math.Log",))
    assert compile_expr("math.Log(N)", {"N"}, config=cfg).evaluate({"N": 1.0}) == 0.0
    with pytest.raises(ExprSyntaxError, match="unknown function 'math.Exp'"):
        compile_expr("math.Exp(N)", {"N"}, config=cfg)


def test_unknown_function_in_allowlist_is_rejected():
    with pytest.raises(ValueError, match="math.Gamma"):
        CompilerConfig(functions=("math.Log", "math.Gamma"))


def test_unknown_function_from_env_fails_on_load(monkeypatch):
    monkeypatch.setenv("PARSEFLOAT_FUNCTIONS", "math.Gamma")
    with pytest.raises(ValueError, match="unknown function"):
        CompilerConfig.load()


def test_function_registry_is_built_once():
    cfg = CompilerConfig(functions=("math.Log", "math.Exp"))
    reg = cfg.function_registry()
    assert cfg.function_registry() is reg
    assert sorted(reg.names()) == ["math.Exp", "math.Log"]


def test_source_length_limit():
    cfg = CompilerConfig(max_source_len=5)
    assert compile_expr("N*N+1", {"N"}, config=cfg).evaluate({"N": 2}) == 5.0
    with pytest.raises(ExprSyntaxError) as ei:
        compile_expr("N*N + 1", {"N"}, config=cfg)
    assert str(ei.value) == "1:1: expression is longer than 5 characters"
    with pytest.raises(ExprSyntaxError):
        compile_slice("float64{N}", {"N"}, config=cfg)
