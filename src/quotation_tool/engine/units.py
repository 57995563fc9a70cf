"""
Length units accepted for item dimensions.

Areas are always expressed in square feet, so every dimension is
converted to feet before multiplying.
"""
from enum import Enum

MM_PER_FOOT = 304.8


class Unit(str, Enum):
    """Measurement unit for an item's height and width."""
    FEET = "feet"
    MILLIMETER = "mm"

    @classmethod
    def parse(cls, value) -> 'Unit':
        """Accept a Unit or one of its string spellings ("feet", "ft", "mm")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("feet", "foot", "ft"):
            return cls.FEET
        if key in ("mm", "millimeter", "millimeters", "millimetre", "millimetres"):
            return cls.MILLIMETER
        raise ValueError(f"Unknown dimension unit: {value!r}")


def to_canonical(value: float, unit: Unit) -> float:
    """Convert a linear dimension to feet. Negative values pass through unchecked."""
    if unit == Unit.MILLIMETER:
        return value / MM_PER_FOOT
    return value
