from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, Mapping


def iso_now_ms() -> str:
    """UTC ISO-8601 timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clamp(v: int, lo: int, hi: int) -> int:
    return int(min(hi, max(lo, v)))


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge `override` into a copy of `base`. Nested dicts are merged key by key,
    everything else is replaced.
    """
    out: Dict[str, Any] = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def timer_ms(func):
    """
    Decorator that returns (result, elapsed_ms) for timing small functions.
    """
    def wrapper(*args, **kwargs):
        t0 = time.perf_counter()
        out = func(*args, **kwargs)
        dt_ms = (time.perf_counter() - t0) * 1e3
        return out, dt_ms
    return wrapper
