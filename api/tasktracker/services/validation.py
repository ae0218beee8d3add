from __future__ import annotations

import re
from typing import Any

from .errors import ValidationError

# Ids are BIGINT columns; max_tasks_per_day is a plain INTEGER.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MAX = 2**31 - 1

_DECIMAL = re.compile(r"-?[0-9]+")


def _parse_int64(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _DECIMAL.fullmatch(raw):
        value = int(raw)
    else:
        return None
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def parse_id(raw: Any, *, kind: str = "user") -> int:
    """Parse a path/form id the way the HTTP surface reports it: 400, never 422.

    Only an optional ``-`` followed by ASCII digits is accepted, within the
    signed 64-bit range.
    """
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        raise ValidationError(f"{kind.capitalize()} id cannot be empty")
    value = _parse_int64(raw)
    if value is None:
        raise ValidationError(f"Invalid {kind} id")
    return value


def clean_text(raw: str | None, *, detail: str = "Task cannot be empty") -> str:
    text = (raw or "").strip()
    if not text:
        raise ValidationError(detail)
    return text


def parse_limit(raw: Any) -> int:
    value = _parse_int64(raw)
    if value is None or value > _INT32_MAX:
        raise ValidationError("Invalid max_tasks_per_day")
    if value < 0:
        raise ValidationError("max_tasks_per_day must be >= 0")
    return value
