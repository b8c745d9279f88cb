# core/dates.py

from __future__ import annotations

from datetime import date, datetime

from django.utils.dateparse import parse_date

from core.exceptions import ValidationError


def as_date(value, *, field_name: str = "date", required: bool = True) -> date | None:
    """Accept a date, a datetime (date part) or an ISO 'YYYY-MM-DD' string."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        parsed = parse_date(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from exc

    if parsed is None:
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return parsed
