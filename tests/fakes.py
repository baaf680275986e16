from __future__ import annotations

import copy
import io
import zipfile
from dataclasses import dataclass, field
from typing import Any

from pygovdata.exceptions import FetchTimeoutError, GovDataTransportError
from pygovdata.state.store import MemoryCacheStore


def make_zip(entries: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@dataclass
class FakeUpstream:
    """Transport double serving canned bodies keyed by URL."""

    responses: dict[str, bytes | Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def serve(self, url: str, body: str | bytes) -> None:
        self.responses[url] = body.encode() if isinstance(body, str) else body

    def fail(self, url: str, exc: Exception) -> None:
        self.responses[url] = exc

    async def fetch_bytes(self, url: str) -> bytes:
        self.calls.append(url)
        response = self.responses.get(url)
        if response is None:
            raise GovDataTransportError(f"HTTP 404 from {url}", status_code=404, url=url)
        if isinstance(response, Exception):
            raise response
        return response


def timeout_error(url: str) -> FetchTimeoutError:
    return FetchTimeoutError(f"Request to {url} timed out", url=url)


class CorruptibleMemoryStore(MemoryCacheStore):
    """Memory store that can hold documents which no longer validate."""

    def set_raw(self, kind: str, document: dict[str, Any]) -> None:
        self._documents[kind] = copy.deepcopy(document)
