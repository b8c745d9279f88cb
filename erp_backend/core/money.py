# core/money.py

"""
MONEY + QUANTITY NORMALIZATION

Shared coercion helpers used by services and reports.

Rules:
- Money is Decimal, 2dp, ROUND_HALF_UP
- Quantities are integer units (bool is rejected even though it is an int)
- Reports emit floats (major units) plus exact minor-unit ints
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.exceptions import ValidationError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value, *, field_name: str = "amount") -> Decimal:
    if value is None or value == "":
        return ZERO

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from exc

    if not amt.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def q2(amount) -> Decimal:
    return (amount or ZERO).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_major_number(amount) -> float:
    return float(q2(amount))


def to_minor_int(amount) -> int:
    return int((q2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def to_int(value, *, field_name: str = "quantity") -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")

    if isinstance(value, int):
        return value

    try:
        dec = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(f"{field_name} must be an integer") from exc

    if not dec.is_finite() or dec != dec.to_integral_value():
        raise ValidationError(f"{field_name} must be an integer")

    return int(dec)
