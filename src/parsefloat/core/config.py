from __future__ import annotations

"""
parsefloat.core.config
======================

Compiler configuration.
- Defaults work out of the box; a JSON file and env variables may override them.
- Values are validated on construction so a bad config fails early.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .types import StrPath


def _parse_csv_env(name: str) -> list[str]:
    val = os.getenv(name)
    if not val:
        return []
    return [s.strip() for s in val.split(",") if s.strip()]


def _load_json(path: Path | None) -> dict[str, Any]:
    if not path or not path.exists():
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a JSON object")
    return data


@dataclass(frozen=True)
class CompilerConfig:
    """Knobs shared by scalar and slice compilation."""

    # Element type named by the slice wrapper, e.g. float64{1.0, N}
    slice_type: str = "float64"

    # Longest accepted source text; 0 disables the check.
    max_source_len: int = 0

    # Allowlist restricting the default function registry; None keeps every built-in.
    functions: tuple[str, ...] | None = None

    _registry: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.slice_type, str) or not self.slice_type.isidentifier():
            raise ValueError("slice_type must be an identifier")
        if not isinstance(self.max_source_len, int) or self.max_source_len < 0:
            raise ValueError("max_source_len must be an int >= 0")
        if self.functions is not None:
            names = tuple(self.functions)
            if not all(isinstance(n, str) and n for n in names):
                raise ValueError("functions must be a list of non-empty strings")
            from ..engine.funcs import get_default_functions

            unknown = [n for n in names if n not in get_default_functions()]
            if unknown:
                raise ValueError(f"unknown function(s) in allowlist: {', '.join(unknown)}")
            object.__setattr__(self, "functions", names)

    def function_registry(self):
        """Return the function registry this config allows; built once per config."""
        if self._registry is None:
            from ..engine.funcs import get_default_functions

            reg = get_default_functions()
            if self.functions is not None:
                reg = reg.restrict(self.functions)
            object.__setattr__(self, "_registry", reg)
        return self._registry

    @classmethod
    def load(cls, path: StrPath | None = None, *, overrides: dict[str, Any] | None = None) -> CompilerConfig:
        """
        Load config from a JSON file (if given and present), then env, then overrides.

        Env overrides:
          - PARSEFLOAT_SLICE_TYPE
          - PARSEFLOAT_MAX_SOURCE_LEN
          - PARSEFLOAT_FUNCTIONS (comma-separated)
        """
        data: dict[str, Any] = {}
        data.update(_load_json(Path(path) if path else None))

        if os.getenv("PARSEFLOAT_SLICE_TYPE"):
            data["slice_type"] = os.environ["PARSEFLOAT_SLICE_TYPE"]
        if os.getenv("PARSEFLOAT_MAX_SOURCE_LEN"):
            raw = os.environ["PARSEFLOAT_MAX_SOURCE_LEN"]
            try:
                data["max_source_len"] = int(raw)
            except ValueError as e:
                raise ValueError(f"PARSEFLOAT_MAX_SOURCE_LEN must be an integer, got {raw!r}") from e
        fns = _parse_csv_env("PARSEFLOAT_FUNCTIONS")
        if fns:
            data["functions"] = fns

        if overrides:
            data.update(overrides)

        if data.get("functions") is not None:
            data["functions"] = tuple(data["functions"])
        return cls(**data)


DEFAULT_CONFIG = CompilerConfig()
