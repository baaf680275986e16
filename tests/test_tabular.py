from __future__ import annotations

import pytest

from pygovdata.exceptions import GovDataFormatError
from pygovdata.ingestion.tabular import parse_csv


def test_returns_one_record_per_data_row_keyed_by_header() -> None:
    text = "make,model,year\nToyota,Camry,2024\nHonda,Civic,2023\nKia,EV6,2024\n"

    records = parse_csv(text)

    assert len(records) == 3
    assert all(set(record) == {"make", "model", "year"} for record in records)
    assert records[1] == {"make": "Honda", "model": "Civic", "year": "2023"}


def test_empty_input_yields_empty_sequence() -> None:
    assert parse_csv("") == []
    assert parse_csv("   \n\n") == []
    assert parse_csv("make,model\n") == []


def test_quoted_fields_may_contain_delimiters_and_newlines() -> None:
    text = 'make,model,notes\n"Land Rover","Range Rover, LWB","line one\nline two"\n'

    (record,) = parse_csv(text)

    assert record["model"] == "Range Rover, LWB"
    assert record["notes"] == "line one\nline two"


def test_inconsistent_column_counts_are_tolerated() -> None:
    text = "make,model,year\nToyota\nHonda,Civic,2023,extra,cells\n"

    records = parse_csv(text)

    assert records[0] == {"make": "Toyota", "model": "", "year": ""}
    assert records[1] == {"make": "Honda", "model": "Civic", "year": "2023"}


def test_blank_lines_bom_and_crlf_are_handled() -> None:
    text = "\ufeff make , model \r\n\r\nBMW,3 Series\r\n   \r\n"

    records = parse_csv(text)

    assert records == [{"make": "BMW", "model": "3 Series"}]


def test_rows_of_empty_cells_still_count_as_records() -> None:
    records = parse_csv("make,model\nToyota,Camry\n,\nHonda,Civic\n")

    assert len(records) == 3
    assert records[1] == {"make": "", "model": ""}


def test_oversized_field_raises_format_error() -> None:
    text = 'make,model,notes\nVW,Golf,"' + "x" * 200_000 + '"\n'

    with pytest.raises(GovDataFormatError, match="Malformed CSV"):
        parse_csv(text)
