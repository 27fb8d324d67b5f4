# kerbside/utils/values.py
"""
Helpers for reading cells out of the reference CSVs and sensor JSON.
pandas hands back NaN for empty cells and floats for integer columns with gaps,
so IDs are normalised to strings before any equality check.
"""

import math
from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """True for None, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def normalize_id(value: Any) -> Optional[str]:
    """Zone numbers / kerbside IDs as comparable strings. 7110.0 → "7110"."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, int):
        return str(value)
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return text
    return str(int(number)) if number.is_integer() and "." in text else text


def text_or_none(value: Any) -> Optional[str]:
    return None if is_blank(value) else str(value).strip()
