from __future__ import annotations

import io
import json
import logging

import pytest

from parsefloat.api import UnknownVariableError, compile_expr, compile_slice
from parsefloat.core.log import HumanFormatter, JsonFormatter, get_logger, log_context, set_level

pytestmark = [pytest.mark.unit]


class _Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured():
    h = _Capture()
    lg = logging.getLogger("parsefloat")
    lg.addHandler(h)
    set_level("DEBUG")
    try:
        yield h.records
    finally:
        lg.removeHandler(h)


def test_compile_logs_structured_events(captured):
    compile_expr("N*N", {"N"})
    rec = next(r for r in captured if getattr(r, "event", None) == "expr.compiled")
    assert rec.name == "parsefloat.compiler"
    assert rec.source == "N*N"
    assert rec.size == 3


def test_compile_failure_is_logged_and_raised(captured):
    with pytest.raises(UnknownVariableError):
        compile_expr("X", set())
    rec = next(r for r in captured if getattr(r, "event", None) == "expr.compile_failed")
    assert rec.error == "unknown variable: X"


def test_slice_compile_event(captured):
    compile_slice("float64{1, 2}", set())
    rec = next(r for r in captured if getattr(r, "event", None) == "slice.compiled")
    assert rec.elements == 2


@pytest.fixture
def human_lines():
    buf = io.StringIO()
    h = logging.StreamHandler(buf)
    h.setLevel(logging.DEBUG)
    h.setFormatter(HumanFormatter())
    lg = logging.getLogger("parsefloat")
    lg.addHandler(h)
    set_level("DEBUG")
    try:
        yield lambda: buf.getvalue().splitlines()
    finally:
        lg.removeHandler(h)


def test_compile_events_carry_source_in_context(human_lines):
    compile_expr("N+1", {"N"})
    line = next(s for s in human_lines() if "expr.compiled" in s)
    assert line.endswith("[source='N+1']")


def test_slice_failure_carries_source_in_context(human_lines):
    with pytest.raises(UnknownVariableError):
        compile_slice("float64{1, X}", set())
    line = next(s for s in human_lines() if "slice.compile_failed" in s)
    assert line.endswith("[source='float64{1, X}']")


def test_json_formatter_merges_context_and_extras():
    log = get_logger("fmt")
    record = log.logger.makeRecord(
        log.logger.name, logging.INFO, __file__, 1, "hello", (), None, extra={"size": 3}
    )
    with log_context(source="N*N"):
        out = json.loads(JsonFormatter().format(record))
    assert out["message"] == "hello"
    assert out["logger"] == "parsefloat.fmt"
    assert out["source"] == "N*N"
    assert out["size"] == 3


def test_reserved_kwargs_are_prefixed():
    log = get_logger("fmt")
    _, kwargs = log.process("m", {"name": "x", "exc_info": False})
    assert kwargs["extra"] == {"field_name": "x"}
    assert kwargs["exc_info"] is False


def test_invalid_level_name():
    with pytest.raises(ValueError):
        set_level("LOUD")
