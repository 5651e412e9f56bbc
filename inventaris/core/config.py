from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Mapping

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Environment-driven rules for code generation and valuation."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTARIS_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    DEPRECIATION_CAP_RATIO: Decimal = Field(default=Decimal("0.9"), gt=0, le=1)
    DAYS_PER_MONTH: Decimal = Field(default=Decimal("30.44"), gt=0)
    DEFAULT_ECONOMIC_LIFE_YEARS: int = Field(default=5, ge=1, le=50)
    MIN_ECONOMIC_LIFE_MONTHS: int = Field(default=12, ge=1)

    PROCUREMENT_SOURCE_CODES: dict[str, str] = Field(
        default_factory=lambda: {
            "Pembelian": "1",
            "Bantuan": "2",
            "STTST": "3",
            "Hibah": "4",
        }
    )
    DEFAULT_PROCUREMENT_CODE: str = "1"
    DEFAULT_LOCATION_CODE: str = "001"
    DEFAULT_CATEGORY_CODE: str = "10"

    CURRENCY_PLACES: int = Field(default=2, ge=0, le=6)

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @field_validator("PROCUREMENT_SOURCE_CODES", mode="before")
    @classmethod
    def parse_source_codes(cls, value: Any) -> dict[str, str]:
        if value in (None, "", {}):
            return {}
        if isinstance(value, Mapping):
            codes: dict[str, str] = {}
            for key, code in value.items():
                cleaned = str(code).strip()
                if len(cleaned) != 1 or not cleaned.isdigit():
                    raise ValueError(f"procurement code for {key!r} must be a single digit")
                codes[str(key).strip()] = cleaned
            return codes
        raise TypeError("PROCUREMENT_SOURCE_CODES must be a mapping of source name to digit")

    @field_validator("DEFAULT_PROCUREMENT_CODE")
    @classmethod
    def check_default_code(cls, value: str) -> str:
        cleaned = value.strip()
        if len(cleaned) != 1 or not cleaned.isdigit():
            raise ValueError("DEFAULT_PROCUREMENT_CODE must be a single digit")
        return cleaned

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def currency_quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.CURRENCY_PLACES)

    @property
    def source_lookup(self) -> dict[str, str]:
        """Procurement codes keyed by case-folded source name."""

        return {name.casefold(): code for name, code in self.PROCUREMENT_SOURCE_CODES.items()}


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    return EngineSettings()


def resolve_settings(settings: EngineSettings | None) -> EngineSettings:
    return settings if settings is not None else get_settings()


__all__ = ["EngineSettings", "get_settings", "resolve_settings"]
