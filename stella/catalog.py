"""Parse, filter and serialize the HYG star catalog as stella_stars.json."""
import csv
import json
import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TypedDict

from stella.config import HOURS_RA_LIMIT, HOURS_TO_DEGREES, MAG_LIMIT, PARSEC_TO_LY
from stella.errors import MissingInputFile

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10_000

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class _EntryBase(TypedDict):
    id: int
    ra: float       # Right ascension in degrees [0, 360)
    dec: float      # Declination in degrees
    mag: float      # Apparent visual magnitude


class CatalogEntry(_EntryBase, total=False):
    name: str
    dist: float     # parsecs
    dist_ly: str    # light years, one decimal
    constellation: str
    spectral: str


@dataclass
class CatalogStats:
    total: int = 0
    kept: int = 0
    named: int = 0
    with_distance: int = 0


_cache: dict[tuple[Path, int], list[CatalogEntry]] = {}


def parse_float(text: str | None) -> float:
    """Float from CSV text; NaN when empty or malformed."""
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def parse_int(text: str | None) -> int | None:
    """Leading integer of text ("12", "12.0", "12x" -> 12); None if there is none."""
    if not text:
        return None
    m = _INT_PREFIX.match(text)
    return int(m.group(1)) if m else None


def normalize_ra(value: float) -> float:
    """Raw ra -> degrees in [0, 360).

    Values below 24 are taken to be hours. This misreads degree catalogs
    with stars just east of ra = 0.
    """
    if value < HOURS_RA_LIMIT:
        value *= HOURS_TO_DEGREES
    return value % 360.0


def to_entry(row: dict[str, str], ordinal: int, mag_limit: float = MAG_LIMIT) -> CatalogEntry | None:
    """Build a CatalogEntry from one CSV row, or None if the row is filtered out.

    Kept iff mag < mag_limit and ra, dec are finite numbers. Rows that fail
    to parse are dropped without complaint.

    Args:
        row: csv.DictReader record.
        ordinal: 1-based row number, used as id when the row's id is unusable.
        mag_limit: faintest magnitude (exclusive) to keep.
    """
    mag = parse_float(row.get("mag"))
    if not (math.isfinite(mag) and mag < mag_limit):
        return None
    ra = normalize_ra(parse_float(row.get("ra")))
    dec = parse_float(row.get("dec"))
    if not (math.isfinite(ra) and math.isfinite(dec)):
        return None

    star_id = parse_int(row.get("id"))
    entry: CatalogEntry = {
        "id": star_id if star_id is not None else ordinal,
        "ra": ra,
        "dec": dec,
        "mag": mag,
    }

    # Optional fields are omitted, never null
    if row.get("proper"):
        entry["name"] = row["proper"]
    dist = parse_float(row.get("dist"))
    if math.isfinite(dist) and dist > 0:
        entry["dist"] = dist
        entry["dist_ly"] = f"{dist * PARSEC_TO_LY:.1f}"
    if row.get("con"):
        entry["constellation"] = row["con"]
    if row.get("spect"):
        entry["spectral"] = row["spect"]
    return entry


def iter_entries(
    lines: Iterable[str],
    mag_limit: float = MAG_LIMIT,
    stats: CatalogStats | None = None,
) -> Iterator[CatalogEntry]:
    """Lazily yield visible stars from CSV text lines, in input order.

    stats, when given, is updated as rows are consumed.
    """
    if stats is None:
        stats = CatalogStats()
    for row in csv.DictReader(lines):
        stats.total += 1
        entry = to_entry(row, stats.total, mag_limit)
        if entry is not None:
            stats.kept += 1
            stats.named += "name" in entry
            stats.with_distance += "dist" in entry
            yield entry
        if stats.total % PROGRESS_EVERY == 0:
            logger.info("Processed: %d stars, found %d visible stars", stats.total, stats.kept)


def sort_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Brightest first. Equal magnitudes keep their input order."""
    return sorted(entries, key=lambda e: e["mag"])


def process_csv(csv_path: Path, mag_limit: float = MAG_LIMIT) -> tuple[list[CatalogEntry], CatalogStats]:
    """Read a HYG CSV file and return (sorted visible stars, stats)."""
    stats = CatalogStats()
    with open(csv_path, newline="", encoding="utf-8") as f:
        entries = sort_entries(iter_entries(f, mag_limit, stats))
    return entries, stats


def write_catalog(entries: list[CatalogEntry], output_path: Path, indent: int | None = 2) -> None:
    """Write the whole catalog as one JSON array."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(entries, f, indent=indent, ensure_ascii=False, allow_nan=False)
    size_kb = output_path.stat().st_size / 1024
    logger.info("Wrote %d stars to %s (%.0f KB)", len(entries), output_path, size_kb)


def load_catalog(path: Path) -> list[CatalogEntry]:
    """Load a catalog JSON written by write_catalog.

    Cached per (path, mtime), so a rewritten file is read again.
    Raises MissingInputFile if the file does not exist.
    """
    path = Path(path).resolve()
    if not path.exists():
        raise MissingInputFile(f"{path.name} not found. Run scripts/process_stars.py first.")
    key = (path, path.stat().st_mtime_ns)
    if key not in _cache:
        with open(path, encoding="utf-8") as f:
            _cache[key] = json.load(f)
    return _cache[key]


def brightest(entries: list[CatalogEntry], n: int = 10) -> list[CatalogEntry]:
    return sort_entries(entries)[:n]
