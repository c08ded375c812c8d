from __future__ import annotations
import os
from typing import Optional


# Defaults
DEFAULT_MAX_NEST = 64

_FALSE_WORDS = ('0', 'false', 'no', 'off')


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_max_nest() -> int:
    """Maximum scope nesting depth (QUILL_MAX_NEST)."""
    depth = int_from_env('QUILL_MAX_NEST', DEFAULT_MAX_NEST)
    if depth < 1:
        raise ValueError(f"QUILL_MAX_NEST must be at least 1, got {depth}")
    return depth


def color_enabled() -> Optional[bool]:
    """Colored diagnostics override (QUILL_COLOR).

    None means unset: click decides from whether stderr is a terminal.
    """
    raw = os.environ.get('QUILL_COLOR')
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() not in _FALSE_WORDS
