"""Asset code generation.

WHAT: Builds codes of the form ``AAA.BB.C.DD.EEE`` (location, category,
procurement source, two-digit year, sequence) for assets that have not been
saved yet.
WHEN: Called by the asset form to fill its read-only code field, and by bulk
creation to reserve consecutive sequences.
HOW: Pad each segment to its fixed width and take the sequence from
``max_existing_sequence`` plus one.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Union

from ..core.codes import BULK_SUFFIX_SEP, parse_sequence, split_bulk_suffix
from ..core.coerce import to_int
from ..core.config import EngineSettings, resolve_settings
from ..core.errors import RecoveryKind, note_recovery
from ..core.procurement import procurement_code
from ..schemas.asset import AssetRecord, LocationRecord

logger = logging.getLogger("inventaris.codegen")

ExistingAsset = Union[AssetRecord, Mapping[str, Any], str]
# Location and category segments come as records (``{code}``) or bare codes.
SegmentSource = Union[LocationRecord, Mapping[str, Any], str, int, None]


def _code_of(item: ExistingAsset) -> str:
    if isinstance(item, AssetRecord):
        return item.code
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        raw = item.get("code")
        if raw is None:
            raw = item.get("kode")
        return "" if raw is None else str(raw)
    return ""


def _segment_code(value: SegmentSource) -> str | int | None:
    if isinstance(value, LocationRecord):
        return value.code
    if isinstance(value, Mapping):
        return LocationRecord.model_validate(dict(value)).code
    return value


def _pad(value: SegmentSource, width: int, fallback: str) -> str:
    value = _segment_code(value)
    cleaned = "" if value is None else str(value).strip()
    if not cleaned:
        return fallback
    return cleaned.zfill(width)


def year_segment(procurement_year: int | str | date | None) -> str:
    """Last two digits of the procurement year, ``00`` when unusable."""

    if isinstance(procurement_year, date):
        year: int | None = procurement_year.year
    else:
        year = to_int(procurement_year, "procurement_year")
    if year is None or year < 0:
        note_recovery(
            RecoveryKind.MISSING_NUMERIC_FIELD,
            "unusable procurement year",
            field="procurement_year",
            value=procurement_year,
        )
        return "00"
    return f"{year % 100:02d}"


def max_existing_sequence(existing_assets: Iterable[ExistingAsset]) -> int:
    """Highest sequence segment across the whole asset population.

    The scan is global: it does not filter by the location,
    category, source or year prefix, so the sequence behaves as one counter
    shared by every code. Bulk unit suffixes are dropped before reading the
    segment, and codes that do not parse contribute nothing. Changing the
    scope of the counter means changing only this function.
    """

    highest = 0
    for item in existing_assets:
        code = _code_of(item)
        if not code:
            continue
        sequence = parse_sequence(code)
        if sequence is None:
            note_recovery(RecoveryKind.MALFORMED_CODE, "code skipped in sequence scan", code=code)
            continue
        if sequence > highest:
            highest = sequence
    return highest


def next_sequence(existing_assets: Iterable[ExistingAsset]) -> int:
    return max_existing_sequence(existing_assets) + 1


def next_sequence_range(existing_assets: Iterable[ExistingAsset], count: int) -> range:
    """Reserve ``count`` consecutive sequences after the current maximum."""

    if count < 1:
        raise ValueError("count must be at least 1")
    start = next_sequence(existing_assets)
    return range(start, start + count)


def format_code(
    location_code: SegmentSource,
    category_code: SegmentSource,
    procurement_source: str | None,
    procurement_year: int | str | date | None,
    sequence: int,
    *,
    settings: EngineSettings | None = None,
) -> str:
    cfg = resolve_settings(settings)
    return ".".join(
        (
            _pad(location_code, 3, cfg.DEFAULT_LOCATION_CODE),
            _pad(category_code, 2, cfg.DEFAULT_CATEGORY_CODE),
            procurement_code(procurement_source, cfg),
            year_segment(procurement_year),
            f"{sequence:03d}",
        )
    )


def generate_code(
    location_code: SegmentSource,
    category_code: SegmentSource,
    procurement_source: str | None,
    procurement_year: int | str | date | None,
    existing_assets: Iterable[ExistingAsset],
    *,
    settings: EngineSettings | None = None,
) -> str:
    """Return the code the next new asset should receive."""

    code = format_code(
        location_code,
        category_code,
        procurement_source,
        procurement_year,
        next_sequence(existing_assets),
        settings=settings,
    )
    logger.debug("code.generated", extra={"extra_data": {"code": code}})
    return code


def generate_codes(
    location_code: SegmentSource,
    category_code: SegmentSource,
    procurement_source: str | None,
    procurement_year: int | str | date | None,
    existing_assets: Iterable[ExistingAsset],
    quantity: int,
    *,
    settings: EngineSettings | None = None,
) -> list[str]:
    """One code per unit, with consecutive sequences after the current maximum."""

    sequences = next_sequence_range(existing_assets, quantity)
    codes = [
        format_code(location_code, category_code, procurement_source, procurement_year, seq, settings=settings)
        for seq in sequences
    ]
    logger.debug("codes.generated", extra={"extra_data": {"first": codes[0], "last": codes[-1], "count": len(codes)}})
    return codes


def bulk_unit_codes(parent_code: str, count: int) -> list[str]:
    """Codes for the individual units of a bulk purchase: ``parent-001`` onwards."""

    if count < 1:
        raise ValueError("count must be at least 1")
    parent, _ = split_bulk_suffix(parent_code)
    if not parent:
        raise ValueError("parent_code is required")
    return [f"{parent}{BULK_SUFFIX_SEP}{index:03d}" for index in range(1, count + 1)]


__all__ = [
    "bulk_unit_codes",
    "format_code",
    "generate_code",
    "generate_codes",
    "max_existing_sequence",
    "next_sequence",
    "next_sequence_range",
    "year_segment",
]
