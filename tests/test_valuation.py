"""Tests for bulk scaling, portfolio totals and breakdowns."""

import sys
from datetime import date
from decimal import Decimal, localcontext
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inventaris.schemas.asset import AssetRecord, BulkHolding, SingleHolding
from inventaris.services.valuation import (
    breakdown,
    build_report,
    filter_by_depreciation,
    parse_depreciation_range,
    scale,
    summarize_portfolio,
    value_asset,
)

NOW = date(2024, 7, 15)


@pytest.fixture()
def portfolio():
    return [
        {
            "code": "001.05.1.23.001",
            "acquisitionCost": 1_000_000,
            "accumulatedDepreciation": 250_000,
            "residualValue": 750_000,
            "status": "baik",
            "categoryId": "c1",
            "locationId": "l1",
        },
        {
            "code": "001.06.2.23.002",
            "acquisitionCost": 100_000,
            "accumulatedDepreciation": 50_000,
            "residualValue": 50_000,
            "bulkTotalCount": 10,
            "isBulkParent": True,
            "status": "rusak",
            "categoryId": "c2",
            "locationId": "l1",
        },
    ]


def test_bulk_totals_are_exact_multiples():
    asset = AssetRecord(
        code="002.10.1.22.004",
        acquisition_cost=1_000_000,
        acquisition_date=date(2022, 3, 1),
        economic_life_years=5,
        bulk_total_count=10,
        is_bulk_parent=True,
    )

    valuation = value_asset(asset, NOW)

    assert valuation.is_bulk is True
    assert valuation.units == 10
    assert valuation.acquisition_cost == Decimal("10000000")
    assert valuation.residual_value == valuation.unit_residual_value * 10
    assert valuation.accumulated_depreciation == valuation.unit_accumulated_depreciation * 10
    assert valuation.residual_value + valuation.accumulated_depreciation == valuation.acquisition_cost


def test_scaling_uses_per_unit_depreciation():
    asset = AssetRecord(acquisition_cost=1_000_000, acquisition_date=date(2000, 1, 1), bulk_total_count=4)

    valuation = value_asset(asset, NOW)

    assert valuation.unit_accumulated_depreciation == Decimal("900000.00")
    assert valuation.accumulated_depreciation == Decimal("3600000.00")
    assert valuation.residual_value == Decimal("400000.00")
    assert valuation.depreciation_percentage == 90


def test_absent_count_matches_explicit_single_unit():
    base = {"acquisitionCost": 8_000_000, "acquisitionDate": "2021-06-01", "economicLifeYears": 8}

    absent = value_asset(base, NOW)
    explicit = value_asset({**base, "bulkTotalCount": 1}, NOW)

    assert absent == explicit
    assert absent.units == 1
    assert absent.is_bulk is False


def test_valuation_is_idempotent():
    asset = AssetRecord(acquisition_cost="7350000.25", acquisition_date=date(2019, 11, 30), bulk_total_count=3)

    first = value_asset(asset, NOW)
    second = value_asset(asset, NOW)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_very_large_costs_are_rounded_and_scaled_exactly():
    asset = {
        "acquisitionCost": "1e27",
        "acquisitionDate": "2020-01-01",
        "economicLifeYears": 5,
        "bulkTotalCount": 3,
    }

    valuation = value_asset(asset, date(2024, 1, 1))
    unit = valuation.unit_accumulated_depreciation

    assert unit.as_tuple().exponent == -2
    assert Decimal("0") < unit < Decimal("9e26")
    assert valuation.unit_residual_value + unit == Decimal("1e27")
    assert valuation.acquisition_cost == Decimal("3e27")
    assert valuation.depreciation_percentage == 80
    with localcontext() as ctx:
        ctx.prec = 60
        assert valuation.accumulated_depreciation == unit * 3
        assert valuation.residual_value == valuation.unit_residual_value * 3
    assert summarize_portfolio([asset], date(2024, 1, 1)).depreciation_percentage == 80


def test_absurd_magnitudes_are_treated_as_unreadable():
    valuation = value_asset({"acquisitionCost": "1e45", "acquisitionDate": "2020-01-01"}, NOW)

    assert valuation.acquisition_cost == Decimal("0")
    assert valuation.accumulated_depreciation == Decimal("0")


def test_scale_accepts_explicit_holdings():
    asset = AssetRecord(acquisition_cost=500, residual_value=200, accumulated_depreciation=300)

    assert scale(SingleHolding(asset=asset), NOW).acquisition_cost == Decimal("500")
    assert scale(BulkHolding(asset=asset, count=3), NOW).acquisition_cost == Decimal("1500")


def test_summarize_portfolio(portfolio):
    summary = summarize_portfolio(portfolio, NOW)

    assert summary.asset_count == 2
    assert summary.unit_count == 11
    assert summary.total_acquisition_cost == Decimal("2000000")
    assert summary.total_residual_value == Decimal("1250000")
    assert summary.total_accumulated_depreciation == Decimal("750000")
    # 37.5% rounds half up
    assert summary.depreciation_percentage == 38


def test_empty_portfolio_is_all_zero():
    summary = summarize_portfolio([], NOW)

    assert summary.asset_count == 0
    assert summary.total_acquisition_cost == Decimal("0")
    assert summary.depreciation_percentage == 0


def test_zero_cost_portfolio_has_zero_percentage():
    summary = summarize_portfolio([{"acquisitionCost": "n/a"}], NOW)

    assert summary.total_acquisition_cost == Decimal("0")
    assert summary.depreciation_percentage == 0


def test_breakdown_by_status(portfolio):
    rows = breakdown(portfolio, "status", NOW)

    assert [row.key for row in rows] == ["rusak", "baik"]
    assert rows[0].label == "Rusak"
    assert rows[0].unit_count == 10
    assert rows[0].acquisition_cost == Decimal("1000000")
    assert rows[1].unit_count == 1


def test_breakdown_by_location_and_category(portfolio):
    portfolio.append({"acquisitionCost": 10, "status": "baik"})

    by_location = breakdown(portfolio, "location", NOW, labels={"l1": "Gedung A"})
    by_category = breakdown(portfolio, "category", NOW)

    assert by_location[0].key == "l1"
    assert by_location[0].label == "Gedung A"
    assert by_location[0].unit_count == 11
    assert by_location[0].acquisition_cost == Decimal("2000000")
    assert by_location[-1].key is None
    assert by_location[-1].label == "Tidak Terkategori"
    assert {row.key for row in by_category} == {"c1", "c2", None}


def test_breakdown_rejects_unknown_key(portfolio):
    with pytest.raises(ValueError):
        breakdown(portfolio, "supplier", NOW)


def test_build_report(portfolio):
    report = build_report(portfolio, NOW, category_labels={"c1": "Elektronik"})

    assert report.summary.unit_count == 11
    assert len(report.by_status) == 2
    assert {row.label for row in report.by_category} == {"Elektronik", "c2"}
    assert len(report.by_location) == 1


def test_build_report_accepts_generators(portfolio):
    report = build_report((asset for asset in portfolio), NOW)

    assert report.summary.asset_count == 2
    assert report.by_location[0].unit_count == 11


def test_parse_depreciation_range():
    assert parse_depreciation_range("0-25") == (0, 25)
    assert parse_depreciation_range(" 76 - 100 ") == (76, 100)
    assert parse_depreciation_range("all") is None
    assert parse_depreciation_range(None) is None
    with pytest.raises(ValueError):
        parse_depreciation_range("50-10")
    with pytest.raises(ValueError):
        parse_depreciation_range("lots")


def test_filter_by_depreciation(portfolio):
    low = filter_by_depreciation(portfolio, 0, 25, NOW)
    high = filter_by_depreciation(portfolio, 26, 50, NOW)

    assert [asset.code for asset in low] == ["001.05.1.23.001"]
    assert [asset.code for asset in high] == ["001.06.2.23.002"]
