"""Python interpreter for Human Resource Machine scripts.

The ``script`` package models parsed programs, ``memory`` the floor tiles,
``interpreter`` the instruction semantics, ``loader`` the text formats and
``system`` wires them together for ``run.py``.
"""

from __future__ import annotations

from . import interpreter, loader, memory, script, system, utils

__version__ = "0.1.0"

__all__: list[str] = [
    "script",
    "memory",
    "interpreter",
    "loader",
    "system",
    "utils",
]
