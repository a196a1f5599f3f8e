# Bulk-index local audio files into the configured blob store.
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

ROOT = os.path.abspath(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from versecast.core.config import settings  # noqa: E402
from versecast.core.errors import StoreError  # noqa: E402
from versecast.core.logging import setup_logging  # noqa: E402
from versecast.services.audio.indexer import AssumedBitrateIndexer  # noqa: E402
from versecast.services.ingest import ingest_track  # noqa: E402
from versecast.services.store.factory import build_store  # noqa: E402


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Index audio files into the versecast store")
    p.add_argument("paths", nargs="+", help="Audio files or directories to scan")
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only ingest the first N files found",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log verbosity",
    )
    return p.parse_args(argv)


def collect_files(paths: List[str], extensions: List[str]) -> List[Path]:
    exts = {e.lower() for e in extensions}
    found: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(sorted(f for f in path.iterdir() if f.is_file() and f.suffix.lower() in exts))
        elif path.is_file() and path.suffix.lower() in exts:
            found.append(path)
        else:
            logging.warning("Skipping %s (not a supported audio file)", path)
    return found


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    files = collect_files(args.paths, settings.ALLOWED_EXTENSIONS)
    if args.limit is not None:
        files = files[: args.limit]
    if not files:
        logging.error("No audio files found in %s", args.paths)
        return 1

    store = build_store(settings)
    indexer = AssumedBitrateIndexer(settings.ASSUMED_BITRATE_BPS)
    logging.info("Ingesting %d file(s) into %s store", len(files), settings.STORAGE_BACKEND)

    for path in files:
        try:
            ingest_track(store, indexer, path.name, path.read_bytes(), settings.AUDIO_CONTENT_TYPE)
        except (OSError, StoreError):
            logging.exception("Failed to ingest %s", path)
            return 1

    logging.info("Ingest complete: %d track(s)", len(files))
    return 0


if __name__ == "__main__":
    sys.exit(main())
