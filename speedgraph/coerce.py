from __future__ import annotations

import math
import re
from numbers import Real
from typing import Optional

import pandas as pd

UNIT_TOKENS = re.compile(r"km/h|kph|mph|m/s|ms-1|ms\^-1", re.IGNORECASE)
DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def to_number_loose(value: object) -> Optional[float]:
    """Best-effort numeric parse of a cell: "1,234" -> 1234.0, "60 km/h" -> 60.0.

    Returns None for blanks, absent cells, non-finite numbers and anything that
    still is not a plain decimal once separators and speed units are removed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        out = float(value)
        return out if math.isfinite(out) else None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None

    s = str(value).strip()
    if not s:
        return None
    cleaned = UNIT_TOKENS.sub("", s.replace(",", "")).strip()
    if not DECIMAL.fullmatch(cleaned):
        return None
    out = float(cleaned)
    return out if math.isfinite(out) else None
