# src/dealcheck/domain/parsing.py
import math
import numbers
from typing import Any


def parse_number(val: Any) -> float | None:
    """
    Lenient converter shared by the request and CSV paths:
      - 250000, 6.5
      - "250000", "£250,000", "6.5%"
    Returns None when missing/blank/garbage. Booleans are not numbers.
    Values too large for a float count as garbage.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, numbers.Real):
        try:
            f = float(val)
        except (OverflowError, ValueError):
            return None
        # NaN from an empty CSV cell is "missing"
        return None if math.isnan(f) else f
    if isinstance(val, str):
        s = val.strip().replace(",", "").replace("£", "")
        if s.endswith("%"):
            s = s[:-1]
        if not s:
            return None
        try:
            return float(s)
        except ValueError:
            return None
    return None
