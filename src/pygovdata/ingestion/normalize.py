"""Normalization helpers.

Centralizes soft-fail parsing of upstream values. Government datasets are
routinely incomplete, so unparseable input yields ``None`` rather than an
exception.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

# Thousands separators: comma, underscore, regular/narrow no-break spaces.
_THOUSANDS_RE = re.compile(r"[,_\s\u00a0\u202f]")


def normalize_number(value: Any) -> int | float | None:
    """Parse a raw cell into a number.

    ``"1,234.5"`` -> ``1234.5``, ``"  42 "`` -> ``42``; empty, ``None``,
    NaN and non-numeric input -> ``None``. Integral values come back as
    ``int``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value) if value.is_integer() else value

    text = _THOUSANDS_RE.sub("", str(value))
    if not text:
        return None
    try:
        result = float(text)
    except ValueError:
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return int(result) if result.is_integer() else result


def safe_int(value: Any) -> int | None:
    parsed = normalize_number(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def is_meaningful(value: Any) -> bool:
    """Return True if the value should be treated as present."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def pick_first(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Resolve one logical field across alternate header spellings.

    Exact key matches are tried first (in candidate order), then a
    case-insensitive pass. Empty values count as absent. Returns
    ``None`` when no candidate is present.
    """
    for key in keys:
        value = record.get(key)
        if is_meaningful(value):
            return value

    folded: dict[str, Any] = {}
    for raw_key, value in record.items():
        if is_meaningful(value):
            folded.setdefault(str(raw_key).strip().lower(), value)
    for key in keys:
        value = folded.get(key.lower())
        if is_meaningful(value):
            return value
    return None
