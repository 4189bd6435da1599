from __future__ import annotations

import math
from decimal import Decimal

from stockbook.domain.errors import ValidationError


def whole_number(value: object, field: str) -> int:
    """int() that refuses bools and fractional values instead of truncating them."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer.")
    if isinstance(value, (float, Decimal)):
        if not math.isfinite(value) or value != int(value):
            raise ValidationError(f"{field} must be a whole number.")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be an integer.") from e


def non_negative_amount(value: object, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number.")
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be a number.") from e
    if not math.isfinite(v):
        raise ValidationError(f"{field} must be a finite number.")
    if v < 0:
        raise ValidationError(f"{field} must be >= 0.")
    return v
