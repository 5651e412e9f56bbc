"""Asset condition constants shared by records and breakdowns."""

from __future__ import annotations

from .errors import RecoveryKind, note_recovery

STATUS_GOOD = "baik"
STATUS_DAMAGED = "rusak"
STATUS_INADEQUATE = "tidak_memadai"

STATUS_CHOICES = (
    STATUS_GOOD,
    STATUS_DAMAGED,
    STATUS_INADEQUATE,
)

STATUS_LABELS = {
    STATUS_GOOD: "Baik",
    STATUS_DAMAGED: "Rusak",
    STATUS_INADEQUATE: "Tidak Memadai",
}

# Older records spell the third state the way the UI labels it.
_STATUS_ALIASES = {
    "kurang baik": STATUS_INADEQUATE,
    "kurang_baik": STATUS_INADEQUATE,
    "tidak memadai": STATUS_INADEQUATE,
}


def normalize_status(value: str | None) -> str:
    """Return a known status value, defaulting to ``baik``."""

    cleaned = (value or "").strip().lower()
    if not cleaned:
        return STATUS_GOOD
    if cleaned in STATUS_CHOICES:
        return cleaned
    if cleaned in _STATUS_ALIASES:
        return _STATUS_ALIASES[cleaned]
    note_recovery(RecoveryKind.UNRECOGNIZED_ENUM, "unknown asset status", field="status", value=value)
    return STATUS_GOOD


def status_label(value: str | None) -> str:
    return STATUS_LABELS[normalize_status(value)]


__all__ = [
    "STATUS_CHOICES",
    "STATUS_DAMAGED",
    "STATUS_GOOD",
    "STATUS_INADEQUATE",
    "STATUS_LABELS",
    "normalize_status",
    "status_label",
]
