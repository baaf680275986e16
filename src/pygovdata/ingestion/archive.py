"""Zip archive extraction for datasets published as zipped CSV."""

from __future__ import annotations

import io
import logging
import zipfile

from pygovdata.exceptions import GovDataFormatError

_logger = logging.getLogger(__name__)

_CSV_SUFFIXES: tuple[str, ...] = (".csv", ".csv.txt")


def decode_text(data: bytes) -> str:
    """Decode a CSV payload, stripping a UTF-8 BOM; latin-1 as fallback."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _is_csv_entry(info: zipfile.ZipInfo) -> bool:
    if info.is_dir():
        return False
    name = info.filename.lower()
    # macOS resource forks ship as __MACOSX/._name.csv
    if name.startswith("__macosx/") or name.rsplit("/", 1)[-1].startswith("._"):
        return False
    return name.endswith(_CSV_SUFFIXES)


def extract_csv(data: bytes, name_hint: str | None = None) -> str:
    """Return the text of the CSV entry inside a zip archive.

    Entries are scanned in archive order. If *name_hint* is given and an
    entry's name contains it (case-insensitive) that entry wins;
    otherwise the first CSV entry is used.

    Raises
    ------
    GovDataFormatError
        The buffer is not a zip archive or holds no CSV entry.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise GovDataFormatError(f"Not a zip archive: {exc}") from exc

    with archive:
        candidates = [info for info in archive.infolist() if _is_csv_entry(info)]
        if not candidates:
            raise GovDataFormatError("No CSV entry found in archive")

        chosen = candidates[0]
        if name_hint:
            hint = name_hint.lower()
            for info in candidates:
                if hint in info.filename.lower():
                    chosen = info
                    break

        _logger.debug("Extracting %s (%d bytes) from archive", chosen.filename, chosen.file_size)
        try:
            payload = archive.read(chosen)
        except (zipfile.BadZipFile, OSError) as exc:
            raise GovDataFormatError(f"Could not read {chosen.filename}: {exc}") from exc

    return decode_text(payload)
