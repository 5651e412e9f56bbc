"""Currency arithmetic that stays exact for large amounts.

The default decimal context keeps 28 significant digits. Rounding a large
cost to cents, or multiplying it by a unit count, can need more than that, so
these helpers widen the precision to fit the operands first.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext


def _exponent(value: Decimal) -> int:
    return int(value.as_tuple().exponent)


def quantize(value: Decimal, quantum: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - _exponent(quantum) + 2)
        return value.quantize(quantum, rounding=rounding)


def multiply(value: Decimal, factor: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + len(factor.as_tuple().digits))
        return value * factor


def subtract(value: Decimal, other: Decimal) -> Decimal:
    with localcontext() as ctx:
        top = max(value.adjusted(), other.adjusted())
        ctx.prec = max(ctx.prec, top - min(_exponent(value), _exponent(other)) + 2)
        return value - other


__all__ = ["multiply", "quantize", "subtract"]
