from __future__ import annotations

from typing import Any

import pytest

from pygovdata.ingestion.envelopes import extract_items

_ROW = {"make": "Hyundai", "model": "Ioniq 5"}


@pytest.mark.parametrize(
    "document",
    [
        [_ROW],
        {"items": [_ROW]},
        {"data": [_ROW]},
        {"results": [_ROW]},
        {"response": {"body": {"items": {"item": [_ROW]}}}},
        {"response": {"body": {"items": {"item": _ROW}}}},
        {"result": [_ROW]},
    ],
)
def test_known_envelopes_resolve_to_rows(document: Any) -> None:
    assert extract_items(document) == [_ROW]


def test_first_non_empty_envelope_wins() -> None:
    document = {"items": [], "data": [{"make": "Kia", "model": "EV6"}], "result": [_ROW]}

    assert extract_items(document) == [{"make": "Kia", "model": "EV6"}]


@pytest.mark.parametrize(
    "document",
    [None, "text", 42, {}, {"items": "not-a-list"}, {"response": {"body": {"items": ""}}}],
)
def test_unknown_shapes_yield_no_rows(document: Any) -> None:
    assert extract_items(document) == []


def test_non_dict_rows_are_discarded() -> None:
    assert extract_items([_ROW, "junk", 3, None]) == [_ROW]
