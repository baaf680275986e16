#!/usr/bin/env python3
"""Fetch, inspect and search the government vehicle data cache.

Usage
-----
Configure sources through ``GOVDATA_*`` environment variables and run::

    export GOVDATA_UK_URL="https://example.gov.uk/vca.csv"
    python scripts/fetch_all.py

Options::

    --cache-dir DIR      Cache directory (default: GOVDATA_CACHE_DIR or ./data)
    --force              Refetch even when the cache is fresh
    --info               Only print cache freshness diagnostics
    --search QUERY       Search the cached index instead of fetching
    --json               Output as machine-readable JSON
    -v, --verbose        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygovdata import GovDataClient, GovDataConfig  # noqa: E402
from pygovdata.models import Dataset, Summary  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_dataset(dataset: Dataset, summary: Summary | None) -> list[str]:
    out = [_section(f"DATASET (updated {dataset.last_updated})")]
    for tag, result in dataset.iter_regions():
        if result is None:
            out.append(f"  {tag:<6} <failed>")
            continue
        out.append(f"  {tag:<6} {result.vehicle_count:>6} vehicles  {result.source}")
        if result.notes:
            out.append(f"         {result.notes}")
    if summary is not None:
        out.append(_section(f"FUEL TYPES ({summary.total_vehicles} vehicles)"))
        for fuel_type, count in sorted(summary.by_fuel_type.items(), key=lambda item: (-item[1], item[0])):
            out.append(f"  {fuel_type:<30} {count:>6}")
    return out


def _format_hits(query: str, hits: list[dict[str, Any]]) -> list[str]:
    out = [_section(f"SEARCH {query!r}: {len(hits)} hits")]
    for hit in hits:
        year = hit.get("year") or ""
        fuel = hit.get("fuelType") or ""
        out.append(f"  [{hit.get('region')}] {year} {hit.get('make')} {hit.get('model')}  {fuel}".rstrip())
    return out


def _emit(payload: Any, lines: list[str], json_mode: bool) -> None:
    if json_mode:
        print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))
    else:
        print("\n".join(lines))


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fetch, inspect and search government vehicle data",
    )
    parser.add_argument("--cache-dir", help="Cache directory (default: GOVDATA_CACHE_DIR or ./data)")
    parser.add_argument("--force", action="store_true", help="Refetch even when the cache is fresh")
    parser.add_argument("--info", action="store_true", help="Only print cache freshness diagnostics")
    parser.add_argument("--search", metavar="QUERY", help="Search the cached index")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    overrides: dict[str, Any] = {}
    if args.cache_dir:
        overrides["cache_dir"] = Path(args.cache_dir)
    config = GovDataConfig.from_env(**overrides)

    async with GovDataClient(config) as client:
        if args.info:
            info = client.get_data_info()
            lines = [_section("CACHE INFO")]
            lines.extend(f"  {key}: {value}" for key, value in info.model_dump(by_alias=True).items())
            _emit(info.model_dump(by_alias=True), lines, args.json_mode)
            return

        if args.search is not None:
            hits = client.search(args.search)
            _emit(hits, _format_hits(args.search, hits), args.json_mode)
            return

        dataset = await (client.force_update() if args.force else client.get_data())
        summary = client.get_summary()
        _emit(dataset.to_document(), _format_dataset(dataset, summary), args.json_mode)


if __name__ == "__main__":
    asyncio.run(main())
