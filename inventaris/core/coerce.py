"""Best-effort conversion of loosely typed record fields.

Records arrive from JSON API responses and CSV imports, so numbers can be
strings, blanks or ``null``. These converters never raise; anything unusable
becomes ``0`` (money), ``None`` (dates and counts) and is noted as a recovered
``missing_numeric_field``.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .errors import RecoveryKind, note_recovery

ZERO = Decimal("0")
# Amounts beyond 10**40 are treated as unreadable.
MAX_MAGNITUDE_EXPONENT = 40

_CURRENCY_NOISE = ("Rp", "rp", "IDR", "$", ",", " ")


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """Convert incoming values to a finite Decimal for currency math."""

    result = _parse_decimal(value, field)
    if result and result.adjusted() > MAX_MAGNITUDE_EXPONENT:
        return _missing(field, value)
    return result


def _parse_decimal(value: Any, field: str) -> Decimal:
    if isinstance(value, bool):
        return _missing(field, value)
    if isinstance(value, Decimal):
        return value if value.is_finite() else _missing(field, value)
    if value is None:
        return ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        result = Decimal(str(value))
        return result if result.is_finite() else _missing(field, value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return ZERO
        for noise in _CURRENCY_NOISE:
            cleaned = cleaned.replace(noise, "")
        try:
            result = Decimal(cleaned)
        except InvalidOperation:
            return _missing(field, value)
        return result if result.is_finite() else _missing(field, value)
    return _missing(field, value)


def to_positive_int(value: Any, field: str = "value") -> int | None:
    """Return a whole number >= 1, or ``None`` when absent or unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    number = to_decimal(value, field)
    if number < 1 or number != number.to_integral_value():
        if number != ZERO:
            note_recovery(RecoveryKind.MISSING_NUMERIC_FIELD, "count is not a positive whole number", field=field, value=value)
        return None
    return int(number)


def to_int(value: Any, field: str = "value") -> int | None:
    """Return a rounded integer, or ``None`` when absent, zero or unusable."""

    if value is None or isinstance(value, bool):
        return None
    number = to_decimal(value, field)
    if not number:
        return None
    return int(number.to_integral_value(rounding=ROUND_HALF_UP))


def to_date(value: Any, field: str = "value") -> date | None:
    """Parse ISO dates and timestamps (``Z`` suffix allowed) into a ``date``."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return datetime.fromisoformat(cleaned.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(cleaned[:10])
        except ValueError:
            pass
    note_recovery(RecoveryKind.MISSING_NUMERIC_FIELD, "unreadable date", field=field, value=value)
    return None


def _missing(field: str, value: Any) -> Decimal:
    note_recovery(RecoveryKind.MISSING_NUMERIC_FIELD, "non-numeric value treated as zero", field=field, value=value)
    return ZERO


__all__ = ["ZERO", "to_date", "to_decimal", "to_int", "to_positive_int"]
