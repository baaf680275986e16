"""Cache store for the dataset, summary and update marker documents.

The three documents form a tiny single-writer key-value store. Each
write is a whole-document overwrite; there are no transactions across
documents. Read and write failures are logged and reported as "no
cache" so callers never fail on storage problems.
"""

from __future__ import annotations

import contextlib
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from pygovdata._constants import CACHE_FILE, MARKER_FILE, SUMMARY_FILE
from pygovdata.models._base import GovDataModel
from pygovdata.models.dataset import Dataset, Summary, UpdateMarker

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=GovDataModel)

DATASET = "dataset"
SUMMARY = "summary"
MARKER = "marker"


class CacheStore(Protocol):
    """Structural interface used by :class:`~pygovdata.client.GovDataClient`."""

    def save(self, dataset: Dataset) -> bool:
        ...

    def load(self) -> Dataset | None:
        ...

    def save_summary(self, summary: Summary) -> bool:
        ...

    def load_summary(self) -> Summary | None:
        ...

    def save_marker(self, marker: UpdateMarker) -> bool:
        ...

    def load_marker(self) -> UpdateMarker | None:
        ...

    def exists(self, kind: str) -> bool:
        ...


def _validate(model: type[TModel], kind: str, document: Any) -> TModel | None:
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        _logger.error("Cached %s is invalid: %s", kind, exc)
        return None


class JsonFileCacheStore:
    """Store each document as a JSON file in *directory*.

    Writes go to a temporary file in the same directory which then
    replaces the target, so readers see either the old or the new
    document, never a partial one.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)
        self._paths: dict[str, Path] = {
            DATASET: self._directory / CACHE_FILE,
            SUMMARY: self._directory / SUMMARY_FILE,
            MARKER: self._directory / MARKER_FILE,
        }

    def path(self, kind: str) -> Path:
        return self._paths[kind]

    def exists(self, kind: str) -> bool:
        return self._paths[kind].is_file()

    def _write(self, kind: str, document: dict[str, Any], *, indent: int | None = 2) -> bool:
        target = self._paths[kind]
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=self._directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=indent, ensure_ascii=False)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, target)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            _logger.error("Error saving %s to %s: %s", kind, target, exc)
            return False
        _logger.debug("Saved %s to %s", kind, target)
        return True

    def _read(self, kind: str) -> Any:
        target = self._paths[kind]
        if not target.is_file():
            return None
        try:
            with target.open(encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            _logger.error("Error loading %s from %s: %s", kind, target, exc)
            return None

    def save(self, dataset: Dataset) -> bool:
        return self._write(DATASET, dataset.to_document())

    def load(self) -> Dataset | None:
        document = self._read(DATASET)
        return None if document is None else _validate(Dataset, DATASET, document)

    def save_summary(self, summary: Summary) -> bool:
        return self._write(SUMMARY, summary.to_document())

    def load_summary(self) -> Summary | None:
        document = self._read(SUMMARY)
        return None if document is None else _validate(Summary, SUMMARY, document)

    def save_marker(self, marker: UpdateMarker) -> bool:
        return self._write(MARKER, marker.to_document(), indent=None)

    def load_marker(self) -> UpdateMarker | None:
        document = self._read(MARKER)
        return None if document is None else _validate(UpdateMarker, MARKER, document)


class MemoryCacheStore:
    """In-memory store holding serialized documents.

    Documents round-trip through their JSON form so behaviour matches
    :class:`JsonFileCacheStore`.
    """

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    def exists(self, kind: str) -> bool:
        return kind in self._documents

    def _get(self, model: type[TModel], kind: str) -> TModel | None:
        document = self._documents.get(kind)
        if document is None:
            return None
        return _validate(model, kind, copy.deepcopy(document))

    def save(self, dataset: Dataset) -> bool:
        self._documents[DATASET] = dataset.to_document()
        return True

    def load(self) -> Dataset | None:
        return self._get(Dataset, DATASET)

    def save_summary(self, summary: Summary) -> bool:
        self._documents[SUMMARY] = summary.to_document()
        return True

    def load_summary(self) -> Summary | None:
        return self._get(Summary, SUMMARY)

    def save_marker(self, marker: UpdateMarker) -> bool:
        self._documents[MARKER] = marker.to_document()
        return True

    def load_marker(self) -> UpdateMarker | None:
        return self._get(UpdateMarker, MARKER)
