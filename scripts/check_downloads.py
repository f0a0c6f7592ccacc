#!/usr/bin/env python3
"""Report which HYG catalog download URLs currently work.

Usage: python scripts/check_downloads.py [URL ...]
"""
import argparse
import logging

from stella.config import DOWNLOAD_SOURCES, PROBE_TIMEOUT
from stella.probe import probe_all, summarize


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Probe catalog download URLs.")
    p.add_argument("urls", nargs="*", default=list(DOWNLOAD_SOURCES))
    p.add_argument("--timeout", type=float, default=PROBE_TIMEOUT)
    p.add_argument("--log-level", default="info")
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(message)s")

    working, failed = summarize(probe_all(args.urls, args.timeout))

    print("Test Results Summary:")
    if working:
        print(f"Working URLs ({len(working)}):")
        for r in working:
            print(f"  - {r.url}")
    else:
        print("No working URLs found")
    if failed:
        print(f"Failed URLs ({len(failed)}):")
        for r in failed:
            print(f"  - {r.url} ({r.status})")

    if working:
        print(f"Recommendation: use the first working URL: {working[0].url}")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
