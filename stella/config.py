"""Download sources, file names and thresholds for the catalog pipeline."""
from dataclasses import dataclass, field
from pathlib import Path

# -- Download Sources (tried in order) --
DOWNLOAD_SOURCES = (
    # Codeberg (current HYG home, main branch)
    "https://codeberg.org/astronexus/hyg/raw/branch/main/data/hyg/CURRENT/hyg_v42.csv.gz",
    "https://codeberg.org/astronexus/hyg/raw/branch/main/data/hyg/CURRENT/hyg_v41.csv.gz",
    "https://codeberg.org/astronexus/hyg/raw/branch/main/data/hyg/CURRENT/hyg_v40.csv.gz",
    # Git LFS media path
    "https://codeberg.org/astronexus/hyg/media/branch/main/data/hyg/CURRENT/hyg_v42.csv.gz",
    # Alternative Codeberg layouts
    "https://codeberg.org/astronexus/hyg/raw/branch/main/hyg/CURRENT/hyg_v42.csv.gz",
    "https://codeberg.org/astronexus/hyg/raw/branch/main/hyg_v42.csv.gz",
    "https://codeberg.org/astronexus/hyg/raw/branch/main/hygdata_v42.csv.gz",
    # Legacy mirrors
    "https://raw.githubusercontent.com/astronexus/hyg-database/master/data/hyg_v42.csv.gz",
    "https://www.astronexus.com/files/downloads/hygdata_v42.csv.gz",
    "https://astronexus.com/downloads/hygdata_v42.csv.gz",
)

# -- File Names --
GZ_NAME = "hyg_v42.csv.gz"
CSV_NAME = "hyg_v42.csv"
OUTPUT_NAME = "stella_stars.json"
HTML_NAME = "index.html"

# -- Catalog Constants --
MAG_LIMIT = 6.5           # naked-eye visibility
PARSEC_TO_LY = 3.26
HOURS_RA_LIMIT = 24.0     # raw ra below this is read as hours
HOURS_TO_DEGREES = 15.0

# -- Network --
DOWNLOAD_TIMEOUT = 30.0   # seconds per attempt
PROBE_TIMEOUT = 10.0
MIN_ARTIFACT_BYTES = 1_000_000  # anything smaller is a pointer file or error page
USER_AGENT = "Stella/1.0"


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one catalog pipeline run."""

    sources: tuple[str, ...] = DOWNLOAD_SOURCES
    work_dir: Path = field(default_factory=Path.cwd)
    output_path: Path | None = None   # defaults to work_dir / OUTPUT_NAME
    mag_limit: float = MAG_LIMIT
    timeout: float = DOWNLOAD_TIMEOUT
    min_bytes: int = MIN_ARTIFACT_BYTES
    keep_archive: bool = False

    @property
    def gz_path(self) -> Path:
        return Path(self.work_dir) / GZ_NAME

    @property
    def csv_path(self) -> Path:
        return Path(self.work_dir) / CSV_NAME

    @property
    def resolved_output(self) -> Path:
        if self.output_path is not None:
            return Path(self.output_path)
        return Path(self.work_dir) / OUTPUT_NAME
