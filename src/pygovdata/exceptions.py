"""Custom exception hierarchy for pygovdata."""

from __future__ import annotations


class GovDataError(Exception):
    """Base exception for all pygovdata errors."""


class GovDataConfigError(GovDataError):
    """Invalid or missing configuration (e.g. a region without a source URL)."""


class GovDataTransportError(GovDataError):
    """HTTP-level failure (network error, non-2xx status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class FetchTimeoutError(GovDataTransportError, TimeoutError):
    """Request exceeded the configured timeout and was aborted."""


class GovDataFormatError(GovDataError):
    """Upstream payload could not be decoded.

    Raised when an archive holds no CSV entry, an archive is corrupt, or a
    JSON document is malformed.
    """


# Names used throughout the pipeline documentation.
ConfigurationError = GovDataConfigError
NetworkError = GovDataTransportError
FormatError = GovDataFormatError
