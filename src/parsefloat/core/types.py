from __future__ import annotations

"""
parsefloat.core.types
=====================

Shared type aliases. Keep this module tiny and dependency-free.
"""

import os
from collections.abc import Collection, Mapping
from pathlib import Path
from typing import Union

# Names an expression may reference, supplied at compile time.
VariableSet = Collection[str]

# Per-evaluation values; ints are accepted and coerced to float.
Bindings = Mapping[str, Union[float, int]]

StrPath = Union[str, os.PathLike[str], Path]
