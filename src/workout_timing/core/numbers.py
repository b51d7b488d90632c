"""Lenient numeric coercion for values read from rows and payloads."""

import math
from typing import Any

Number = int | float


def finite_number(value: Any) -> Number | None:
    """
    Coerce a raw field to a finite number, or None if it is not one.

    Numeric strings are accepted (rows may come from form input); bools,
    NaN and infinities are not.  Integral floats are returned as int.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number: Number = float(text)
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        number = value
    else:
        return None

    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number
