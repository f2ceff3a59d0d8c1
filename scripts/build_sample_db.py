#!/usr/bin/env python3
"""Build an embedded store (data/data.db) from a JSON dataset."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Make the backend package importable
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from app.db.seed import SAMPLE_DATASET, build_embedded_store, load_dataset


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dataset",
        type=Path,
        default=SAMPLE_DATASET,
        help="JSON file with 'parties' and 'llm_responses' arrays",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(__file__).parent.parent / "data" / "data.db",
        help="SQLite file to create",
    )
    return parser.parse_args()


async def main():
    args = parse_args()
    dataset = load_dataset(args.dataset)
    path = await build_embedded_store(args.output, dataset)
    print(
        f"Wrote {len(dataset.get('parties', []))} parties and "
        f"{len(dataset.get('llm_responses', []))} policy rows to {path}"
    )


if __name__ == "__main__":
    asyncio.run(main())
