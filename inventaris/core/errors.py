"""Recovered data problems.

Nothing in the engine raises for bad asset data. Each recovery is logged at
DEBUG on ``inventaris.recovery`` with a ``code``/``message``/``details``
envelope.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger("inventaris.recovery")


class RecoveryKind(str, Enum):
    MALFORMED_CODE = "malformed_code"
    MISSING_NUMERIC_FIELD = "missing_numeric_field"
    UNRECOGNIZED_ENUM = "unrecognized_enum"


def recovery_envelope(kind: RecoveryKind, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"code": kind.value, "message": message}
    if details:
        payload["details"] = details
    return payload


def note_recovery(kind: RecoveryKind, message: str, **details: Any) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(message, extra={"extra_data": recovery_envelope(kind, message, details or None)})


__all__ = ["RecoveryKind", "note_recovery", "recovery_envelope"]
