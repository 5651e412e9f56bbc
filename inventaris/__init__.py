"""Asset code generation and depreciation valuation for the inventory manager.

The UI layer hands over plain asset, category and location records and gets
back generated codes and valuation figures. Nothing here performs I/O; the
reference "now" is always supplied by the caller.
"""

from __future__ import annotations

from .core.config import EngineSettings, get_settings
from .core.logging import configure_logging
from .schemas.asset import (
    AssetRecord,
    BulkHolding,
    CategoryRecord,
    LocationRecord,
    SingleHolding,
    classify_holding,
)
from .schemas.valuation import AssetValuation, BreakdownRow, PortfolioReport, PortfolioSummary
from .services.codegen import (
    bulk_unit_codes,
    generate_code,
    generate_codes,
    max_existing_sequence,
    next_sequence_range,
)
from .services.depreciation import base_accumulated_depreciation, base_residual_value
from .services.valuation import (
    breakdown,
    build_report,
    filter_by_depreciation,
    summarize_portfolio,
    value_asset,
)

__all__ = [
    "AssetRecord",
    "AssetValuation",
    "BreakdownRow",
    "BulkHolding",
    "CategoryRecord",
    "EngineSettings",
    "LocationRecord",
    "PortfolioReport",
    "PortfolioSummary",
    "SingleHolding",
    "base_accumulated_depreciation",
    "base_residual_value",
    "breakdown",
    "build_report",
    "bulk_unit_codes",
    "classify_holding",
    "configure_logging",
    "filter_by_depreciation",
    "generate_code",
    "generate_codes",
    "get_settings",
    "max_existing_sequence",
    "next_sequence_range",
    "summarize_portfolio",
    "value_asset",
]
