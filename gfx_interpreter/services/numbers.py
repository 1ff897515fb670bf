import math
import re
from typing import Any

# Leading number of a string like "100px", "500ms", "-12.5deg"
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def to_number(value: Any) -> float | None:
    """Read a number from an int, float or numeric-looking string.

    Unit suffixes are stripped ("500ms" -> 500). Percentages, booleans, NaN and
    anything non-numeric return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if is_percentage(value):
            return None
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_number(
    value: Any,
    fallback: float,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float:
    """Coerce a value to a number, falling back on failure and clamping to bounds."""
    number = to_number(value)
    if number is None:
        number = fallback
    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum
    return number


def is_percentage(value: Any) -> bool:
    return isinstance(value, str) and value.strip().endswith("%")
