from __future__ import annotations

"""
parsefloat.core.log
===================

Structured logging for the compiler, built on the stdlib `logging` module:
- a "parsefloat" logger namespace that stays silent until an app opts in;
- keyword fields on log calls (log.debug("...", event="expr.compiled", size=3));
- a contextvar-backed context merged into every record (e.g. the source text
  being compiled, or the slice element index);
- JSON output for machines, a compact human format for terminals.
"""

import contextvars
import json
import logging
import os
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, ClassVar, Final

__all__ = [
    "bind_context",
    "configure_from_env",
    "disable_stdout_logging",
    "enable_stdout_logging",
    "get_logger",
    "log_context",
    "set_level",
]

LOGGER_NAME: Final[str] = "parsefloat"

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "parsefloat_log_ctx", default=None
)


def _ctx_copy() -> dict[str, Any]:
    ctx = _log_context.get()
    return dict(ctx) if ctx else {}


def bind_context(**fields: Any) -> None:
    """Merge fields into the current log context (None values are dropped)."""
    ctx = _ctx_copy()
    ctx.update({k: v for k, v in fields.items() if v is not None})
    _log_context.set(ctx)


@contextmanager
def log_context(**fields: Any):
    """Temporarily add fields to the log context; restores the previous one on exit."""
    token = _log_context.set({**_ctx_copy(), **{k: v for k, v in fields.items() if v is not None}})
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------- formatters ----------

_STD_ATTRS: Final[frozenset[str]] = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


def _iso_utc_ms(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, message, context, extras, error."""

    def __init__(self, *, include_stack: bool = False) -> None:
        super().__init__()
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": _iso_utc_ms(record.created),
            "level": record.levelname,
            "logger": record.name,
        }
        msg = record.getMessage()
        if msg:
            out["message"] = msg

        ctx = _log_context.get()
        if ctx:
            out.update(ctx)

        for k, v in record.__dict__.items():
            if k not in _STD_ATTRS and k not in out:
                out[k] = v

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            out["error"] = {
                "type": exc_type.__name__ if exc_type else "Exception",
                "message": str(exc) if exc else None,
            }
            if self.include_stack:
                out["error"]["stack"] = self.formatException(record.exc_info)

        return json.dumps(out, ensure_ascii=False, separators=(",", ":"), default=str)


class HumanFormatter(logging.Formatter):
    """Compact single-line format for local debugging."""

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d"

    _context_keys: ClassVar[tuple[str, ...]] = ("source", "element")

    def format(self, record: logging.LogRecord) -> str:
        s = f"{self.formatTime(record)} {record.levelname:<5} {record.name}: {record.getMessage()}"
        ctx = _log_context.get()
        if ctx:
            compact = {k: ctx[k] for k in self._context_keys if ctx.get(k) is not None}
            if compact:
                s += "  [" + ", ".join(f"{k}={v!r}" for k, v in compact.items()) + "]"
        if record.exc_info:
            s += "\n" + self.formatException(record.exc_info)
        return s


class _KwExtraAdapter(logging.LoggerAdapter):
    """
    Adapter that moves unknown keyword arguments into `extra`, so callers can write

        log.debug("expr.compiled", event="expr.compiled", size=3)

    Keys that collide with LogRecord attributes are prefixed with "field_".
    """

    _passthrough: ClassVar[frozenset[str]] = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        for k in [k for k in kwargs if k not in self._passthrough]:
            v = kwargs.pop(k)
            key = f"field_{k}" if k in _STD_ATTRS else k
            extra.setdefault(key, v)
        kwargs["extra"] = extra
        return msg, kwargs


# ---------- configuration ----------

_stdout_handler_key = "_parsefloat_stdout_handler"
_configured = False


def _bootstrap_minimal() -> None:
    global _configured
    if _configured:
        return
    lg = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in lg.handlers):
        lg.addHandler(logging.NullHandler())
    _configured = True


def get_logger(name: str | None = None) -> logging.LoggerAdapter:
    """Return a keyword-friendly adapter over `parsefloat[.name]`."""
    _bootstrap_minimal()
    base = logging.getLogger(LOGGER_NAME)
    return _KwExtraAdapter(base.getChild(name) if name else base, {})


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    val = getattr(logging, str(level).upper(), None)
    if isinstance(val, int):
        return val
    raise ValueError(f"invalid log level {level!r}")


def set_level(level: int | str) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(_resolve_level(level))


def enable_stdout_logging(
    *,
    level: int | str = logging.DEBUG,
    json_output: bool = True,
    include_stack: bool = False,
    pretty: bool = False,
) -> None:
    """Attach a stdout handler (JSON by default, HumanFormatter when pretty=True)."""
    lvl = _resolve_level(level)
    _bootstrap_minimal()
    disable_stdout_logging()

    fmt: logging.Formatter
    if pretty:
        fmt = HumanFormatter()
    elif json_output:
        fmt = JsonFormatter(include_stack=include_stack)
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    h = logging.StreamHandler(sys.stdout)
    h.set_name(_stdout_handler_key)
    h.setLevel(lvl)
    h.setFormatter(fmt)
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(h)
    if lg.level == logging.NOTSET or lg.level > lvl:
        lg.setLevel(lvl)


def disable_stdout_logging() -> None:
    lg = logging.getLogger(LOGGER_NAME)
    for h in list(lg.handlers):
        if h.get_name() == _stdout_handler_key:
            lg.removeHandler(h)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def configure_from_env() -> None:
    """
    Env:
      - PARSEFLOAT_LOG_STDOUT=1|true
      - PARSEFLOAT_LOG_LEVEL=DEBUG|INFO|...  (default WARNING)
      - PARSEFLOAT_LOG_PRETTY=1
      - PARSEFLOAT_LOG_STACK=1
    """
    level = os.getenv("PARSEFLOAT_LOG_LEVEL", "WARNING")
    pretty = _env_flag("PARSEFLOAT_LOG_PRETTY")

    _bootstrap_minimal()
    set_level(level)
    if _env_flag("PARSEFLOAT_LOG_STDOUT"):
        enable_stdout_logging(
            level=level,
            json_output=not pretty,
            include_stack=_env_flag("PARSEFLOAT_LOG_STACK"),
            pretty=pretty,
        )
    else:
        disable_stdout_logging()


_bootstrap_minimal()
