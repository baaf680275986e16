"""Helpers for safe debug logging.

Some upstream APIs (notably the Korean open-data portal) take their
credentials as query parameters. This module redacts them before URLs
reach the logs or the persisted dataset.
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SENSITIVE_QUERY_KEYS: frozenset[str] = frozenset(
    {
        "servicekey",
        "apikey",
        "api_key",
        "key",
        "token",
        "access_token",
    }
)

PLACEHOLDER = "<redacted>"


def redact_url(url: str) -> str:
    """Return *url* with sensitive query parameter values replaced."""
    if not url or "?" not in url:
        return url

    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    if not any(key.lower() in _SENSITIVE_QUERY_KEYS for key, _ in pairs):
        return url

    redacted = [(key, PLACEHOLDER if key.lower() in _SENSITIVE_QUERY_KEYS else value) for key, value in pairs]
    return urlunsplit(parts._replace(query=urlencode(redacted, safe="<>")))
