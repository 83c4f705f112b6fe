"""
inputs.py — Input validation shared by every driver factory.

All checks raise ValidationError with a message fit for the user; they run
before a driver yields its first operation.
"""

from numbers import Real
from typing import Any, List, Sequence

from structures.errors import ValidationError


MAX_ELEMENTS = 16


def coerce_number(raw: Any, what: str = "value") -> Any:
    """Accept ints, floats and numeric strings ("42", " 7 ")."""
    if isinstance(raw, bool):
        raise ValidationError(f"Please enter a valid number for {what}")
    if isinstance(raw, Real):
        return raw
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        raise ValidationError(f"Please enter a value for {what}")
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise ValidationError(f"Please enter a valid number for {what}")


def coerce_int(raw: Any, what: str = "index") -> int:
    number = coerce_number(raw, what)
    if isinstance(number, float):
        if not number.is_integer():
            raise ValidationError(f"{what.capitalize()} must be a whole number")
        number = int(number)
    return int(number)


def coerce_values(values: Sequence[Any], limit: int = MAX_ELEMENTS) -> List[Any]:
    if values is None:
        values = []
    if not isinstance(values, (list, tuple)):
        raise ValidationError("Values must be a list of numbers")
    items = [coerce_number(v, "array element") for v in values]
    if len(items) > limit:
        raise ValidationError(f"At most {limit} elements can be visualised")
    return items


def check_index(index: Any, low: int, high: int) -> int:
    """Integer in the closed range [low, high]."""
    idx = coerce_int(index, "index")
    if idx < low or idx > high:
        raise ValidationError(f"Index must be between {low} and {high}")
    return idx


def check_bound(n: Any, low: int, high: int, what: str = "n") -> int:
    value = coerce_int(n, what)
    if value < low or value > high:
        raise ValidationError(f"{what} must be between {low} and {high}")
    return value
