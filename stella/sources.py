"""Fetch the raw HYG catalog from an ordered list of mirrors and gunzip it."""
import gzip
import http.client
import logging
import shutil
import urllib.request
import zlib
from pathlib import Path

from stella.config import CSV_NAME, GZ_NAME, USER_AGENT, PipelineConfig
from stella.errors import CorruptArtifact, DownloadFailed, SourceExhausted

logger = logging.getLogger(__name__)

CHUNK_SIZE = 256 * 1024


def download(url: str, dest: Path, timeout: float) -> int:
    """Stream url into dest. Returns the number of bytes written.

    The body goes to a ``.part`` file first and is renamed on completion,
    so dest only ever holds a finished download.
    Raises DownloadFailed on a non-200 status; network errors and
    timeouts propagate as OSError or http.client.HTTPException. A failed
    download leaves no .part file behind.
    """
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    tmp_path = dest.with_suffix(dest.suffix + ".part")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            if resp.status != 200:
                raise DownloadFailed(f"status {resp.status}")
            total = resp.length
            done = 0
            with open(tmp_path, "wb") as f:
                while True:
                    chunk = resp.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    done += len(chunk)
                    if total:
                        logger.debug("Progress: %.1f%% (%.1f MB)",
                                     done / total * 100, done / 1024 / 1024)
        tmp_path.replace(dest)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return done


def _discard(path: Path) -> None:
    path.unlink(missing_ok=True)
    path.with_suffix(path.suffix + ".part").unlink(missing_ok=True)


def acquire(config: PipelineConfig) -> Path:
    """Return a local catalog artifact, downloading it if needed.

    An existing CSV or archive in work_dir short-circuits the network.
    Otherwise each source is tried in order until one yields a body larger
    than config.min_bytes.

    Raises:
        SourceExhausted: no source produced a usable artifact.
    """
    if config.csv_path.exists():
        logger.info("Found existing %s", config.csv_path)
        return config.csv_path
    if config.gz_path.exists():
        logger.info("Found existing %s", config.gz_path)
        return config.gz_path

    Path(config.work_dir).mkdir(parents=True, exist_ok=True)
    attempts: list[tuple[str, str]] = []
    for i, url in enumerate(config.sources, start=1):
        dest = Path(config.work_dir) / (CSV_NAME if url.endswith(".csv") else GZ_NAME)
        logger.info("Downloading from source %d: %s", i, url)
        try:
            size = download(url, dest, config.timeout)
        except (DownloadFailed, OSError, http.client.HTTPException, ValueError) as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Source %d failed (%s)", i, reason)
            attempts.append((url, reason))
            _discard(dest)
            continue

        if size <= config.min_bytes:
            reason = f"too small ({size} bytes)"
            logger.warning("Source %d file seems %s, trying next source", i, reason)
            attempts.append((url, reason))
            _discard(dest)
            continue

        logger.info("Download complete: %s (%.2f MB)", dest, size / 1024 / 1024)
        return dest

    raise SourceExhausted(attempts)


def decompress(path: Path) -> Path:
    """Gunzip path next to itself and return the CSV path.

    Paths that are not ``.gz`` are returned unchanged.

    The CSV is written to a ``.part`` file and renamed on success, so an
    interrupted extraction never leaves a CSV behind.

    Raises:
        CorruptArtifact: the gzip stream is malformed or the CSV could not
            be written.
    """
    path = Path(path)
    if path.suffix != ".gz":
        return path

    out_path = path.with_suffix("")
    tmp_path = out_path.with_suffix(out_path.suffix + ".part")
    logger.info("Extracting %s", path)
    try:
        with gzip.open(path, "rb") as src, open(tmp_path, "wb") as dst:
            shutil.copyfileobj(src, dst, CHUNK_SIZE)
        tmp_path.replace(out_path)
    except (OSError, EOFError, zlib.error) as exc:
        raise CorruptArtifact(f"Extraction failed, {path.name} may be corrupted: {exc}") from exc
    finally:
        tmp_path.unlink(missing_ok=True)
    logger.info("Extraction complete: %s", out_path)
    return out_path
