"""Catalog pipeline: acquire -> decompress -> filter -> sort -> write JSON.

One run is a single attempt. Any StellaError aborts before the output
file is touched.
"""
import logging
from dataclasses import dataclass
from pathlib import Path

from stella.catalog import CatalogEntry, CatalogStats, brightest, process_csv, write_catalog
from stella.config import PipelineConfig
from stella.sources import acquire, decompress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    output_path: Path
    stats: CatalogStats
    entries: list[CatalogEntry]


def run(config: PipelineConfig) -> PipelineResult:
    """Run the full catalog pipeline and return what was written."""
    artifact = acquire(config)
    csv_path = decompress(artifact)

    logger.info("Processing stars from %s", csv_path)
    entries, stats = process_csv(csv_path, config.mag_limit)
    output_path = config.resolved_output
    write_catalog(entries, output_path)

    logger.info("Total stars processed: %d", stats.total)
    logger.info("Visible stars (mag < %s): %d", config.mag_limit, stats.kept)
    logger.info("Named stars: %d", stats.named)
    logger.info("Stars with distance data: %d", stats.with_distance)
    logger.info("Top 10 brightest stars:")
    for line in format_top(entries):
        logger.info("  %s", line)

    if not config.keep_archive and config.gz_path.exists():
        logger.info("Cleaning up %s", config.gz_path)
        config.gz_path.unlink()

    return PipelineResult(output_path=output_path, stats=stats, entries=entries)


def format_top(entries: list[CatalogEntry], n: int = 10) -> list[str]:
    """Report lines for the n brightest stars: '1. Sirius (mag: -1.44)'."""
    return [
        f"{i}. {star.get('name', 'Unnamed')} (mag: {star['mag']:.2f})"
        for i, star in enumerate(brightest(entries, n), start=1)
    ]
