from __future__ import annotations

import logging
import re
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Mapping, Union

from ..core.asset_status import STATUS_CHOICES, status_label
from ..core.coerce import ZERO
from ..core.config import EngineSettings, resolve_settings
from ..core.money import multiply, quantize, subtract
from ..schemas.asset import AssetRecord, BulkHolding, SingleHolding, classify_holding, coerce_asset
from ..schemas.valuation import AssetValuation, BreakdownRow, PortfolioReport, PortfolioSummary
from .depreciation import (
    base_accumulated_depreciation,
    base_residual_value,
    depreciation_percentage,
    remaining_life_months,
)

logger = logging.getLogger("inventaris.valuation")

UNASSIGNED_LABEL = "Tidak Terkategori"
WHOLE = Decimal(1)
HUNDRED = Decimal(100)

_RANGE_RE = re.compile(r"^\s*(\d{1,3})\s*-\s*(\d{1,3})\s*$")

AssetLike = Union[AssetRecord, Mapping[str, Any]]


def scale(
    holding: SingleHolding | BulkHolding,
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> AssetValuation:
    """Value one holding: per-unit figures first, then multiplied by its units."""

    cfg = resolve_settings(settings)
    asset = holding.asset
    units = holding.units

    unit_cost = asset.acquisition_cost
    unit_accumulated = base_accumulated_depreciation(asset, now, cfg)
    unit_residual = base_residual_value(asset, now, cfg)
    count = Decimal(units)

    return AssetValuation(
        code=asset.code,
        units=units,
        is_bulk=isinstance(holding, BulkHolding),
        unit_acquisition_cost=unit_cost,
        unit_accumulated_depreciation=unit_accumulated,
        unit_residual_value=unit_residual,
        acquisition_cost=multiply(unit_cost, count),
        accumulated_depreciation=multiply(unit_accumulated, count),
        residual_value=multiply(unit_residual, count),
        depreciation_percentage=depreciation_percentage(unit_cost, unit_accumulated),
        remaining_life_months=remaining_life_months(asset, now, cfg),
    )


def value_asset(
    asset: AssetLike,
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> AssetValuation:
    return scale(classify_holding(asset), now, settings)


def value_assets(
    assets: Iterable[AssetLike],
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> list[AssetValuation]:
    cfg = resolve_settings(settings)
    return [value_asset(asset, now, cfg) for asset in assets]


def portfolio_depreciation_percentage(total_acquisition: Decimal, total_residual: Decimal) -> int:
    if total_acquisition <= 0:
        return 0
    ratio = subtract(total_acquisition, total_residual) / total_acquisition * HUNDRED
    return int(quantize(ratio, WHOLE))


def summarize_portfolio(
    assets: Iterable[AssetLike],
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> PortfolioSummary:
    """Aggregate bulk-scaled totals for a collection of assets."""

    valuations = value_assets(assets, now, settings)
    return _summarize(valuations)


def _summarize(valuations: list[AssetValuation]) -> PortfolioSummary:
    total_acquisition = sum((v.acquisition_cost for v in valuations), ZERO)
    total_residual = sum((v.residual_value for v in valuations), ZERO)
    total_accumulated = sum((v.accumulated_depreciation for v in valuations), ZERO)
    return PortfolioSummary(
        asset_count=len(valuations),
        unit_count=sum(v.units for v in valuations),
        total_acquisition_cost=total_acquisition,
        total_residual_value=total_residual,
        total_accumulated_depreciation=total_accumulated,
        depreciation_percentage=portfolio_depreciation_percentage(total_acquisition, total_residual),
    )


def _status_key(asset: AssetRecord) -> str | None:
    return asset.status


def _category_key(asset: AssetRecord) -> str | None:
    return asset.category_id


def _location_key(asset: AssetRecord) -> str | None:
    return asset.location_id


BREAKDOWN_KEYS: Dict[str, Callable[[AssetRecord], str | None]] = {
    "status": _status_key,
    "category": _category_key,
    "location": _location_key,
}


def breakdown(
    assets: Iterable[AssetLike],
    key: str,
    now: date | datetime,
    settings: EngineSettings | None = None,
    labels: Mapping[str, str] | None = None,
) -> list[BreakdownRow]:
    """Group assets by status, category or location, summing scaled units and values.

    ``labels`` maps group keys (category or location ids) to display names;
    status groups are labelled from the status table.
    """

    key_fn = BREAKDOWN_KEYS.get(key)
    if key_fn is None:
        raise ValueError(f"unknown breakdown key {key!r}; expected one of {sorted(BREAKDOWN_KEYS)}")
    cfg = resolve_settings(settings)

    groups: Dict[str | None, Dict[str, Any]] = defaultdict(
        lambda: {"unit_count": 0, "acquisition_cost": ZERO, "residual_value": ZERO}
    )
    for asset in assets:
        holding = classify_holding(asset)
        valuation = scale(holding, now, cfg)
        group = groups[key_fn(holding.asset)]
        group["unit_count"] += valuation.units
        group["acquisition_cost"] += valuation.acquisition_cost
        group["residual_value"] += valuation.residual_value

    rows = [
        BreakdownRow(
            key=group_key,
            label=_label_for(key, group_key, labels),
            unit_count=data["unit_count"],
            acquisition_cost=data["acquisition_cost"],
            residual_value=data["residual_value"],
        )
        for group_key, data in groups.items()
    ]
    rows.sort(key=lambda row: (row.acquisition_cost, row.unit_count), reverse=True)
    return rows


def _label_for(key: str, group_key: str | None, labels: Mapping[str, str] | None) -> str:
    if key == "status" and group_key in STATUS_CHOICES:
        return status_label(group_key)
    if group_key is None:
        return UNASSIGNED_LABEL
    if labels and group_key in labels:
        return labels[group_key]
    return group_key


def build_report(
    assets: Iterable[AssetLike],
    now: date | datetime,
    settings: EngineSettings | None = None,
    category_labels: Mapping[str, str] | None = None,
    location_labels: Mapping[str, str] | None = None,
) -> PortfolioReport:
    """Summary plus status, category and location breakdowns for report pages."""

    cfg = resolve_settings(settings)
    records = [coerce_asset(asset) for asset in assets]
    report = PortfolioReport(
        summary=summarize_portfolio(records, now, cfg),
        by_status=breakdown(records, "status", now, cfg),
        by_category=breakdown(records, "category", now, cfg, category_labels),
        by_location=breakdown(records, "location", now, cfg, location_labels),
    )
    logger.debug(
        "report.built",
        extra={
            "extra_data": {
                "asset_count": report.summary.asset_count,
                "unit_count": report.summary.unit_count,
            }
        },
    )
    return report


def parse_depreciation_range(value: str | None) -> tuple[int, int] | None:
    """Parse a filter such as ``"26-50"`` into inclusive bounds; ``None`` for "all"."""

    if value is None:
        return None
    cleaned = value.strip().lower()
    if not cleaned or cleaned == "all":
        return None
    match = _RANGE_RE.match(cleaned)
    if not match:
        raise ValueError(f"invalid depreciation range {value!r}")
    low, high = int(match.group(1)), int(match.group(2))
    if low > high:
        raise ValueError(f"invalid depreciation range {value!r}")
    return low, high


def filter_by_depreciation(
    assets: Iterable[AssetLike],
    low: int,
    high: int,
    now: date | datetime,
    settings: EngineSettings | None = None,
) -> list[AssetRecord]:
    """Keep assets whose per-asset depreciation percentage lies within ``[low, high]``."""

    cfg = resolve_settings(settings)
    kept: list[AssetRecord] = []
    for asset in assets:
        holding = classify_holding(asset)
        percentage = scale(holding, now, cfg).depreciation_percentage
        if low <= percentage <= high:
            kept.append(holding.asset)
    return kept


__all__ = [
    "BREAKDOWN_KEYS",
    "breakdown",
    "build_report",
    "filter_by_depreciation",
    "parse_depreciation_range",
    "portfolio_depreciation_percentage",
    "scale",
    "summarize_portfolio",
    "value_asset",
    "value_assets",
]
