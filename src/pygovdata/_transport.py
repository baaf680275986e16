"""HTTP transport for raw government dataset downloads."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pygovdata._redact import redact_url
from pygovdata.config import GovDataConfig
from pygovdata.exceptions import FetchTimeoutError, GovDataTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the region adapters.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def fetch_bytes(self, url: str) -> bytes:
        ...


class HttpTransport:
    """Fetch raw bytes over HTTP(S) with a per-request timeout.

    There is no retry logic; callers decide how to degrade on failure.
    """

    def __init__(self, config: GovDataConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def fetch_bytes(self, url: str) -> bytes:
        """GET *url* and return the response body.

        Raises
        ------
        FetchTimeoutError
            The request did not complete within ``request_timeout_ms``.
        GovDataTransportError
            Non-2xx status or any client-side transport failure.
        """
        safe_url = redact_url(url)
        headers = {"user-agent": self._config.user_agent, "accept-encoding": "gzip, deflate"}

        _logger.debug("GET %s", safe_url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise GovDataTransportError(
                        f"HTTP {resp.status} from {safe_url}: {resp.reason}",
                        status_code=resp.status,
                        url=safe_url,
                    )
                body = await resp.read()
        except GovDataTransportError:
            raise
        except TimeoutError as exc:
            raise FetchTimeoutError(
                f"Request to {safe_url} timed out after {self._config.request_timeout_ms} ms",
                url=safe_url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise GovDataTransportError(
                f"Request to {safe_url} failed: {exc}",
                url=safe_url,
            ) from exc

        _logger.debug("GET %s -> %d bytes", safe_url, len(body))
        return body
