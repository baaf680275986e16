"""CSV parsing into column-keyed records."""

from __future__ import annotations

import csv
import io

from pygovdata.exceptions import GovDataFormatError


def _is_blank(row: list[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV *text* into one dict per data row keyed by the header.

    Quoted fields may contain delimiters and newlines. Short rows are
    padded with ``""``; surplus cells on long rows are ignored. Only
    lines that are blank after trimming are skipped, so a row of empty
    cells still yields a record. Empty input yields ``[]``.

    Raises
    ------
    GovDataFormatError
        The text is not parseable as CSV (e.g. an oversized field).
    """
    if not text or not text.strip():
        return []

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""))
    header: list[str] | None = None
    records: list[dict[str, str]] = []

    try:
        for row in reader:
            if _is_blank(row):
                continue
            if header is None:
                header = [cell.strip() for cell in row]
                continue

            record: dict[str, str] = {}
            for index, column in enumerate(header):
                if not column or column in record:
                    continue
                record[column] = row[index].strip() if index < len(row) else ""
            records.append(record)
    except csv.Error as exc:
        raise GovDataFormatError(f"Malformed CSV near line {reader.line_num}: {exc}") from exc

    return records
