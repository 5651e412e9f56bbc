"""Procurement source (asal pengadaan) code lookup."""

from __future__ import annotations

from .config import EngineSettings, resolve_settings
from .errors import RecoveryKind, note_recovery


def procurement_code(value: str | None, settings: EngineSettings | None = None) -> str:
    """Map a procurement source to its one-digit code segment."""

    cfg = resolve_settings(settings)
    cleaned = (value or "").strip().casefold()
    code = cfg.source_lookup.get(cleaned)
    if code is None:
        note_recovery(
            RecoveryKind.UNRECOGNIZED_ENUM,
            "unknown procurement source",
            field="procurement_source",
            value=value,
            fallback=cfg.DEFAULT_PROCUREMENT_CODE,
        )
        return cfg.DEFAULT_PROCUREMENT_CODE
    return code


__all__ = ["procurement_code"]
