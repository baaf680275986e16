"""Deterministic staleness policy.

This module contains no I/O. The store hands it whatever marker it could
read (or ``None``) and the current time.
"""

from __future__ import annotations

import math

from pygovdata.models.dataset import UpdateMarker

_MS_PER_HOUR = 60 * 60 * 1000


def elapsed_ms(marker: UpdateMarker | None, now_ms: int) -> float:
    """Milliseconds since *marker* was written; ``inf`` when there is none."""
    if marker is None:
        return math.inf
    return float(now_ms - marker.timestamp)


def needs_update(marker: UpdateMarker | None, now_ms: int, interval_ms: int) -> bool:
    """Decide whether the cached dataset must be refetched.

    Policy:
    - No (or unreadable) marker: refetch.
    - Otherwise refetch once more than *interval_ms* has elapsed.
    """
    return elapsed_ms(marker, now_ms) > interval_ms


def hours_ago(marker: UpdateMarker | None, now_ms: int) -> float:
    """Whole hours since the last update, ``inf`` when never updated."""
    elapsed = elapsed_ms(marker, now_ms)
    if math.isinf(elapsed):
        return elapsed
    return float(math.floor(elapsed / _MS_PER_HOUR))
