"""Locale-tolerant numeric coercion for operator and catalog inputs."""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any, default: float | None = 0.0) -> float | None:
    """Coerce a reading or dimension to float.

    Accepts numbers and strings using either ``.`` or ``,`` as decimal
    separator. Blank, unparseable and non-finite values return ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".", 1)
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    if not math.isfinite(number):
        return default
    return number


def format_number(value: float) -> str:
    """Compact display form used in reasons and notes: 12.0 -> '12', 8.55 -> '8.55'."""
    return f"{round(value, 2):g}"
