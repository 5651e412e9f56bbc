from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetValuation(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    units: int = Field(ge=1)
    is_bulk: bool = False
    unit_acquisition_cost: Decimal
    unit_accumulated_depreciation: Decimal
    unit_residual_value: Decimal
    acquisition_cost: Decimal
    accumulated_depreciation: Decimal
    residual_value: Decimal
    depreciation_percentage: int
    remaining_life_months: Decimal


class PortfolioSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_count: int = 0
    unit_count: int = 0
    total_acquisition_cost: Decimal = Decimal("0")
    total_residual_value: Decimal = Decimal("0")
    total_accumulated_depreciation: Decimal = Decimal("0")
    depreciation_percentage: int = 0


class BreakdownRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Optional[str]
    label: str
    unit_count: int
    acquisition_cost: Decimal
    residual_value: Decimal


class PortfolioReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: PortfolioSummary
    by_status: list[BreakdownRow] = Field(default_factory=list)
    by_category: list[BreakdownRow] = Field(default_factory=list)
    by_location: list[BreakdownRow] = Field(default_factory=list)


__all__ = ["AssetValuation", "BreakdownRow", "PortfolioReport", "PortfolioSummary"]
