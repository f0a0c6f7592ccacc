#!/usr/bin/env python3
"""Download the HYG catalog, keep naked-eye stars, write stella_stars.json.

Usage: python scripts/process_stars.py [--work-dir DIR] [--out FILE] [--source URL ...]

An existing hyg_v42.csv or hyg_v42.csv.gz in the work dir is reused
without touching the network.
"""
import argparse
import logging
from pathlib import Path

from stella.config import DOWNLOAD_SOURCES, DOWNLOAD_TIMEOUT, MAG_LIMIT, MIN_ARTIFACT_BYTES, PipelineConfig
from stella.errors import StellaError
from stella.pipeline import run

logger = logging.getLogger("process_stars")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Build stella_stars.json from the HYG star catalog.")
    p.add_argument("--work-dir", type=Path, default=Path.cwd(),
                   help="Where the downloaded catalog is stored (default: cwd)")
    p.add_argument("--out", type=Path, default=None,
                   help="Output JSON path (default: <work-dir>/stella_stars.json)")
    p.add_argument("--source", action="append", dest="sources", metavar="URL",
                   help="Candidate download URL, repeatable; replaces the built-in list")
    p.add_argument("--mag-limit", type=float, default=MAG_LIMIT)
    p.add_argument("--timeout", type=float, default=DOWNLOAD_TIMEOUT)
    p.add_argument("--min-bytes", type=int, default=MIN_ARTIFACT_BYTES)
    p.add_argument("--keep-archive", action="store_true",
                   help="Do not delete the .gz archive after processing")
    p.add_argument("--log-level", default="info")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(message)s")

    config = PipelineConfig(
        sources=tuple(args.sources) if args.sources else DOWNLOAD_SOURCES,
        work_dir=args.work_dir,
        output_path=args.out,
        mag_limit=args.mag_limit,
        timeout=args.timeout,
        min_bytes=args.min_bytes,
        keep_archive=args.keep_archive,
    )
    try:
        result = run(config)
    except StellaError as exc:
        logger.error("%s", exc)
        print("Troubleshooting tips:")
        print("  1. Check your internet connection")
        print("  2. Try running the script again")
        print("  3. Download the catalog manually into the work dir")
        return 1

    print(f"Wrote {len(result.entries)} stars to {result.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
