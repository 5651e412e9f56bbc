"""Straight-line depreciation for a single unit of an asset.

Every figure here is per unit. Multiplying by the bulk unit count happens in
``inventaris.services.valuation`` and only after these rules have run.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any, Mapping

from ..core.coerce import ZERO
from ..core.config import EngineSettings, resolve_settings
from ..core.money import multiply, quantize, subtract
from ..schemas.asset import AssetRecord, coerce_asset

SECONDS_PER_DAY = Decimal(86400)
MICROSECONDS = Decimal(1_000_000)
HUNDRED = Decimal(100)
WHOLE = Decimal(1)


def _quantize(value: Decimal, settings: EngineSettings, rounding: str = ROUND_HALF_UP) -> Decimal:
    return quantize(value, settings.currency_quantum, rounding)


def elapsed_days(acquired: date, now: date | datetime) -> Decimal:
    """Return days between ``acquired`` (midnight) and ``now``, fractional for datetimes."""

    if isinstance(now, datetime):
        start = datetime.combine(acquired, time.min, tzinfo=now.tzinfo)
        delta = now - start
        seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / MICROSECONDS
        return seconds / SECONDS_PER_DAY
    return Decimal((now - acquired).days)


def months_in_use(acquired: date | None, now: date | datetime, settings: EngineSettings | None = None) -> Decimal:
    """Age in average-length months, never negative."""

    if acquired is None:
        return ZERO
    cfg = resolve_settings(settings)
    months = elapsed_days(acquired, now) / cfg.DAYS_PER_MONTH
    return max(ZERO, months)


def economic_life_months(years: int | None, settings: EngineSettings | None = None) -> int:
    cfg = resolve_settings(settings)
    return max(cfg.MIN_ECONOMIC_LIFE_MONTHS, (years or cfg.DEFAULT_ECONOMIC_LIFE_YEARS) * 12)


def monthly_depreciation(asset: AssetRecord | Mapping[str, Any], settings: EngineSettings | None = None) -> Decimal:
    record = coerce_asset(asset)
    return record.acquisition_cost / Decimal(economic_life_months(record.economic_life_years, settings))


def base_accumulated_depreciation(
    asset: AssetRecord | Mapping[str, Any],
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> Decimal:
    """Per-unit accumulated depreciation.

    A stored non-zero figure wins. Otherwise, with both cost and acquisition
    date known, straight-line depreciation over the economic life, capped at
    ``DEPRECIATION_CAP_RATIO`` of cost. Anything else is zero.
    """

    cfg = resolve_settings(settings)
    record = coerce_asset(asset)
    if record.accumulated_depreciation:
        return record.accumulated_depreciation
    if not record.acquisition_cost or record.acquisition_date is None:
        return ZERO

    straight_line = monthly_depreciation(record, cfg) * months_in_use(record.acquisition_date, now, cfg)
    cap = multiply(record.acquisition_cost, cfg.DEPRECIATION_CAP_RATIO)
    # Rounding the cap down keeps the quantized result at or below it.
    return min(_quantize(straight_line, cfg), _quantize(cap, cfg, ROUND_DOWN))


def base_residual_value(
    asset: AssetRecord | Mapping[str, Any],
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> Decimal:
    """Per-unit residual value (nilai sisa): stored non-zero figure, else cost minus depreciation."""

    record = coerce_asset(asset)
    if record.residual_value:
        return record.residual_value
    accumulated = base_accumulated_depreciation(record, now, settings)
    return max(ZERO, subtract(record.acquisition_cost, accumulated))


def remaining_life_months(
    asset: AssetRecord | Mapping[str, Any],
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> Decimal:
    cfg = resolve_settings(settings)
    record = coerce_asset(asset)
    life = Decimal(economic_life_months(record.economic_life_years, cfg))
    remaining = life - months_in_use(record.acquisition_date, now, cfg)
    return _quantize(max(ZERO, remaining), cfg)


def depreciation_percentage(cost: Decimal, accumulated: Decimal) -> int:
    """Whole-number share of cost already depreciated, 0 when cost is not positive."""

    if cost <= 0:
        return 0
    ratio = accumulated / cost * HUNDRED
    return int(quantize(ratio, WHOLE))


__all__ = [
    "base_accumulated_depreciation",
    "base_residual_value",
    "depreciation_percentage",
    "economic_life_months",
    "elapsed_days",
    "months_in_use",
    "monthly_depreciation",
    "remaining_life_months",
]
