"""Lenient numeric parsing for spreadsheet-style values."""

from __future__ import annotations

import math
import re
from typing import Optional

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Optional[str]) -> Optional[float]:
    """Return the number at the start of ``value``, or None when there is none.

    Trailing text is ignored, so ``"45.2%"`` parses as ``45.2``. Callers choose
    their own fallback: sorting treats None as 0, threshold filters exclude it.

    Args:
        value: Raw field text, possibly missing.

    Returns:
        Optional[float]: Parsed finite number, or None.
    """
    if not value:
        return None
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def number_or_zero(value: Optional[str]) -> float:
    parsed = parse_number(value)
    return 0.0 if parsed is None else parsed


__all__ = ["parse_number", "number_or_zero"]
