#!/usr/bin/env python3
"""Generate the Stella app icons (icon-192.png, icon-512.png).

Usage: python scripts/create_icons.py [--out-dir DIR] [--size N ...]
"""
import argparse
import logging
from pathlib import Path

from stella.errors import StellaError
from stella.icons import ICON_SIZES, write_icons

logger = logging.getLogger("create_icons")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Render app icons as PNG.")
    p.add_argument("--out-dir", type=Path, default=Path.cwd())
    p.add_argument("--size", type=int, action="append", dest="sizes")
    p.add_argument("--log-level", default="info")
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(message)s")

    try:
        paths = write_icons(args.out_dir, tuple(args.sizes) if args.sizes else ICON_SIZES)
    except StellaError as exc:
        logger.error("%s", exc)
        return 1
    print(f"Generated {len(paths)} icons in {args.out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
