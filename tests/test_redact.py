from __future__ import annotations

from pygovdata._redact import PLACEHOLDER, redact_url


def test_redact_url_hides_service_keys() -> None:
    redacted = redact_url("https://apis.example.kr/cars?page=1&serviceKey=abc%2B123")

    assert "abc" not in redacted
    assert redacted == f"https://apis.example.kr/cars?page=1&serviceKey={PLACEHOLDER}"


def test_redact_url_leaves_plain_urls_untouched() -> None:
    url = "https://www.fueleconomy.gov/feg/epadata/vehicles.csv.zip"

    assert redact_url(url) == url
    assert redact_url(f"{url}?download=1") == f"{url}?download=1"
    assert redact_url("") == ""
