#!/usr/bin/env python3
"""
Merge Script - Resolve per-provider anime records into golden records

Reads anime records of several metadata providers, merges records describing
the same anime and writes the resulting records. Ambiguous records are kept
unmerged in the output.

Input is either a JSON array of anime records or an object holding the array
under "data". Merge locks are read from --merge-lock-file or the
MERGE_LOCK_FILE environment variable.

Usage:
    python scripts/run_merging.py <input.json> <output.json> [--merge-lock-file merge.lock]
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from common.config.providers import provider_for_source
from common.config.settings import get_settings
from common.models.anime import Anime
from merging import MergingService

logger = logging.getLogger(__name__)

_ANIME_LIST = TypeAdapter(list[Anime])


def load_records(input_file: Path) -> list[Anime]:
    """Load and validate anime records from a JSON file."""
    with open(input_file, encoding="utf-8") as f:
        content: Any = json.load(f)

    if isinstance(content, dict):
        content = content.get("data", [])

    return _ANIME_LIST.validate_python(content)


def count_sources_by_provider(records: list[Anime]) -> dict[str, int]:
    """Count sources per provider name, logging sources of unknown providers."""
    counts: dict[str, int] = {}
    for anime in records:
        for source in sorted(anime.sources):
            provider = provider_for_source(source)
            if provider is None:
                logger.warning(f"Source [{source}] of [{anime.title}] belongs to an unknown provider")
                continue
            counts[provider.name] = counts.get(provider.name, 0) + 1
    return counts


def write_records(records: list[Anime], output_file: Path) -> None:
    """Write anime records sorted by title and sources."""
    ordered = sorted(records, key=lambda anime: (anime.title, sorted(anime.sources)))
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(
            [anime.model_dump(mode="json") for anime in ordered],
            f,
            ensure_ascii=False,
            indent=2,
        )


def main() -> None:
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description="Merge anime records of different metadata providers into golden records"
    )
    parser.add_argument("input", type=Path, help="JSON file with per-provider anime records")
    parser.add_argument("output", type=Path, help="JSON file for the merged anime records")
    parser.add_argument(
        "--merge-lock-file",
        type=Path,
        help="JSON file with merge locks (default: MERGE_LOCK_FILE)",
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.merge_lock_file is not None:
        settings = settings.model_copy(update={"merge_lock_file": args.merge_lock_file})

    logging.basicConfig(level=settings.log_level, format=settings.log_format)

    try:
        records = load_records(args.input)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Unable to load anime records from {args.input}: {e}")
        sys.exit(1)

    logger.info(f"Merging [{len(records)}] anime records from {args.input}")
    for name, count in sorted(count_sources_by_provider(records).items()):
        logger.info(f"  {name}: [{count}] sources")
    merged = asyncio.run(MergingService.from_settings(settings).merge(records))

    write_records(merged, args.output)
    logger.info(f"Wrote [{len(merged)}] anime records to {args.output}")


if __name__ == "__main__":
    main()
