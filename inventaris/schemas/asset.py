from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Literal, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..core.asset_status import STATUS_GOOD, normalize_status
from ..core.coerce import ZERO, to_date, to_decimal, to_int, to_positive_int


class AssetRecord(BaseModel):
    """One asset row as supplied by the backend. Monetary fields are per unit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str = Field(default="", validation_alias=AliasChoices("code", "kode"))
    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "nama"))
    acquisition_cost: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("acquisition_cost", "acquisitionCost", "harga_perolehan"),
    )
    acquisition_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("acquisition_date", "acquisitionDate", "tanggal_perolehan"),
    )
    economic_life_years: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("economic_life_years", "economicLifeYears", "umur_ekonomis_tahun"),
    )
    residual_value: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("residual_value", "residualValue", "nilai_sisa"),
    )
    accumulated_depreciation: Decimal = Field(
        default=ZERO,
        validation_alias=AliasChoices("accumulated_depreciation", "accumulatedDepreciation", "akumulasi_penyusutan"),
    )
    bulk_total_count: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("bulk_total_count", "bulkTotalCount"),
    )
    is_bulk_parent: bool = Field(default=False, validation_alias=AliasChoices("is_bulk_parent", "isBulkParent"))
    status: str = Field(default=STATUS_GOOD)
    category_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("category_id", "categoryId"))
    location_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("location_id", "locationId", "lokasi_id"),
    )
    procurement_source: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("procurement_source", "procurementSource", "asal_pengadaan"),
    )

    @field_validator("code", mode="before")
    @classmethod
    def clean_code(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("acquisition_cost", "residual_value", "accumulated_depreciation", mode="before")
    @classmethod
    def coerce_money(cls, value: Any, info: ValidationInfo) -> Decimal:
        return to_decimal(value, info.field_name)

    @field_validator("acquisition_date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any, info: ValidationInfo) -> date | None:
        return to_date(value, info.field_name)

    @field_validator("economic_life_years", mode="before")
    @classmethod
    def coerce_life(cls, value: Any, info: ValidationInfo) -> int | None:
        return to_int(value, info.field_name)

    @field_validator("bulk_total_count", mode="before")
    @classmethod
    def coerce_count(cls, value: Any, info: ValidationInfo) -> int | None:
        return to_positive_int(value, info.field_name)

    @field_validator("is_bulk_parent", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "y"}
        return bool(value)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value: Any) -> str:
        return normalize_status(value if isinstance(value, str) else None)

    @field_validator("category_id", "location_id", "name", "procurement_source", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @property
    def units(self) -> int:
        return self.bulk_total_count or 1


class LocationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = ""
    id: Optional[str] = None
    name: Optional[str] = None

    @field_validator("code", mode="before")
    @classmethod
    def clean_code(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("id", "name", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip() or None


class CategoryRecord(LocationRecord):
    pass


class SingleHolding(BaseModel):
    """An ordinary asset: the record is exactly one physical unit."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    asset: AssetRecord

    @property
    def units(self) -> int:
        return 1


class BulkHolding(BaseModel):
    """A bulk parent record standing in for ``count`` identical units."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bulk"] = "bulk"
    asset: AssetRecord
    count: int = Field(gt=1)

    @property
    def units(self) -> int:
        return self.count


def coerce_asset(value: AssetRecord | Mapping[str, Any]) -> AssetRecord:
    if isinstance(value, AssetRecord):
        return value
    return AssetRecord.model_validate(value)


def classify_holding(value: AssetRecord | Mapping[str, Any]) -> SingleHolding | BulkHolding:
    asset = coerce_asset(value)
    if asset.bulk_total_count and asset.bulk_total_count > 1:
        return BulkHolding(asset=asset, count=asset.bulk_total_count)
    return SingleHolding(asset=asset)


__all__ = [
    "AssetRecord",
    "BulkHolding",
    "CategoryRecord",
    "LocationRecord",
    "SingleHolding",
    "classify_holding",
    "coerce_asset",
]
