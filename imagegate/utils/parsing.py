# -----------------------------------------------------------------------------
# imagegate/utils/parsing.py - Parse-or-default numeric coercion
# -----------------------------------------------------------------------------
# Client numerics are read leniently: a leading number is taken ("12px" -> 12),
# anything unreadable returns None and the caller substitutes its default.
# Malformed input never becomes a request error.
# -----------------------------------------------------------------------------

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _INT_PREFIX.match(value)
        return int(m.group(1)) if m else None
    return None


def parse_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None
    if isinstance(value, str):
        m = _FLOAT_PREFIX.match(value)
        if not m:
            return None
        f = float(m.group(1))
        return f if math.isfinite(f) else None
    return None


def int_or_default(value: Any, default: int) -> int:
    parsed = parse_int(value)
    return default if parsed is None else parsed


def float_or_default(value: Any, default: float) -> float:
    parsed = parse_float(value)
    return default if parsed is None else parsed


def clamp(value, low, high):
    return max(low, min(high, value))
