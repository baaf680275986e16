"""Base model for pygovdata documents.

Every persisted document inherits from :class:`GovDataModel` which
provides:

* ``alias_generator=to_camel`` so snake_case fields serialize to the
  camelCase keys used by the cache documents.
* ``populate_by_name`` so models can be built from either spelling.
* :meth:`GovDataModel.to_document` for whole-document JSON dumps.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Placeholder strings upstream datasets use for "not available".
_SENTINELS = frozenset({"", "--", "-", "n/a", "N/A", "NaN", "nan"})


def utcnow_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_sentinel(value: Any) -> bool:
    """Return ``True`` for values that mean "no data"."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return True
    return isinstance(value, float) and math.isnan(value)


class GovDataModel(BaseModel):
    """Base for pygovdata models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        protected_namespaces=(),
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict keyed by camelCase aliases."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
