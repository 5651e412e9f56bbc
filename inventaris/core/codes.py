"""Asset code parsing helpers.

An asset code reads ``AAA.BB.C.DD.EEE``: location, category, procurement
source, two-digit year and a three-digit sequence. Units of a bulk purchase
append ``-NNN`` to the parent code (``009.20.4.25.002-003``). These helpers
split, validate and order codes; generating new ones lives in
``inventaris.services.codegen``.
"""

from __future__ import annotations

import re
from typing import Iterable

__all__ = [
    "ASSET_CODE_RE",
    "BULK_SUFFIX_SEP",
    "code_sort_key",
    "is_valid_code",
    "parse_sequence",
    "sort_codes",
    "split_bulk_suffix",
]


ASSET_CODE_RE = re.compile(r"^[0-9]{3}\.[0-9]{2}\.[0-9]\.[0-9]{2}\.[0-9]{3}$")
BULK_SUFFIX_SEP = "-"
SEGMENT_COUNT = 5

_DIGIT_RUN_RE = re.compile(r"([0-9]+)")


def _is_digits(text: str) -> bool:
    # str.isdigit also accepts superscripts and other scripts that int() rejects.
    return text.isascii() and text.isdigit()


def split_bulk_suffix(code: str | None) -> tuple[str, str | None]:
    """Return ``(parent_code, suffix)``; suffix is ``None`` for plain codes."""

    cleaned = (code or "").strip()
    if BULK_SUFFIX_SEP not in cleaned:
        return cleaned, None
    parent, _, suffix = cleaned.partition(BULK_SUFFIX_SEP)
    return parent, suffix or None


def parse_sequence(code: str | None) -> int | None:
    """Read the trailing sequence segment of a code, ignoring any bulk suffix.

    Returns ``None`` when the parent code is not five dot-separated segments or
    the last segment is not a whole number.
    """

    parent, _ = split_bulk_suffix(code)
    parts = parent.split(".")
    if len(parts) != SEGMENT_COUNT:
        return None
    tail = parts[-1].strip()
    if not _is_digits(tail):
        return None
    return int(tail)


def is_valid_code(code: str | None) -> bool:
    parent, suffix = split_bulk_suffix(code)
    if not ASSET_CODE_RE.match(parent):
        return False
    return suffix is None or _is_digits(suffix)


def code_sort_key(code: str | None) -> tuple:
    """Natural ordering key: numeric runs compare as numbers.

    ``009.20.4.25.002-10`` sorts after ``009.20.4.25.002-9`` and both sort after
    the bare parent ``009.20.4.25.002``.
    """

    parent, suffix = split_bulk_suffix(code)
    if suffix is None:
        return (_natural_parts(parent), 0, ())
    return (_natural_parts(parent), 1, _natural_parts(suffix))


def _natural_parts(value: str) -> tuple[tuple[int, int, str], ...]:
    # Tag each run so digits and text never compare against each other directly.
    return tuple(
        (0, int(part), "") if _is_digits(part) else (1, 0, part)
        for part in _DIGIT_RUN_RE.split(value)
        if part
    )


def sort_codes(codes: Iterable[str]) -> list[str]:
    return sorted(codes, key=code_sort_key)
