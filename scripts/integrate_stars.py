#!/usr/bin/env python3
"""Splice the brightest stars from stella_stars.json into the app's index.html.

Usage: python scripts/integrate_stars.py [--catalog FILE] [--html FILE] [--limit N]
"""
import argparse
import logging
from pathlib import Path

from stella.config import HTML_NAME, OUTPUT_NAME
from stella.errors import StellaError
from stella.integrate import DEFAULT_LIMIT, integrate

logger = logging.getLogger("integrate_stars")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Write catalog stars into index.html.")
    p.add_argument("--catalog", type=Path, default=Path(OUTPUT_NAME))
    p.add_argument("--html", type=Path, default=Path(HTML_NAME))
    p.add_argument("--limit", type=int, default=DEFAULT_LIMIT)
    p.add_argument("--log-level", default="info")
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(message)s")

    try:
        count = integrate(args.catalog, args.html, args.limit)
    except StellaError as exc:
        logger.error("%s", exc)
        return 1
    print(f"Integration complete: added {count} stars to {args.html}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
