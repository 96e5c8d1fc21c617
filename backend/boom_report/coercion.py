# Boom Deployment Planner - Field Coercion
# SPDX-License-Identifier: Apache-2.0

"""
Lenient conversion of calculator values into database field values.

The calculator posts numbers, numeric strings, or short phrases such as
"200+" and "1 per 100 ft". Every helper here returns None instead of raising
so one odd field never blocks the whole record.
"""

import math
import re
from typing import Any, Optional

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def to_float(value: Any) -> Optional[float]:
    """Leading numeric value of a number or string, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    """Like to_float, truncated toward zero."""
    number = to_float(value)
    if number is None:
        return None
    return int(number)


def parse_interval(value: Any) -> Optional[int]:
    """
    Extract the anchor interval from the forms the calculator produces.

    Examples:
        "150"          -> 150
        "200+"         -> 200   (at least 200)
        "1 per 100 ft" -> 1
        150.7          -> 150
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return to_int(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_INTEGER.match(value)
    if not match:
        return None
    return int(match.group(1))


def to_text(value: Any) -> Optional[str]:
    """Stripped string form, or None when empty."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def segment_length(boom_length: Optional[float], segments: Optional[int], is_cascade: bool) -> Optional[float]:
    """Length of one boom segment; the whole boom when no cascade is used."""
    if boom_length is None:
        return None
    if not is_cascade:
        return boom_length
    if not segments or segments <= 0:
        return None
    return boom_length / segments
