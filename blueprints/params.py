"""Request value parsing shared by the JSON blueprints."""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from flask import request


def flag(payload: Mapping[str, Any], key: str) -> bool:
    value = payload.get(key)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def number(payload: Mapping[str, Any], key: str, default: Optional[float] = None) -> Optional[float]:
    """Read a finite float; ``ValueError`` for text, ``inf`` or ``nan``."""

    value = payload.get(key)
    if value in (None, ""):
        return default
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{key} must be a finite number")
    return result


def int_arg(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, "", "all"):
        return None
    return int(value)
