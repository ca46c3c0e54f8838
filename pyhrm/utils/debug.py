"""Lightweight debug logging helpers for the interpreter."""

from __future__ import annotations

import os
import sys
from typing import Iterable

ENV_VAR = "HRM_DEBUG"

_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get(ENV_VAR, "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reset_categories() -> None:
    """Forget the cached categories so ``HRM_DEBUG`` is read again."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[HRM][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    # stdout carries the program output
    print(f"{prefix} {message}", file=sys.stderr)
