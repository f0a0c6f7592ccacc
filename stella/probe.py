"""Check which catalog download URLs currently answer with 200."""
import logging
import socket
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Iterable

from stella.config import PROBE_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    url: str
    status: str                      # "success" | "failed" | "error" | "timeout"
    http_status: int | None = None
    content_type: str | None = None
    content_length: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def probe(url: str, timeout: float = PROBE_TIMEOUT) -> ProbeResult:
    """GET url and inspect status + headers only. Never raises for network errors."""
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            code = resp.status
            headers = resp.headers
    except urllib.error.HTTPError as exc:
        code = exc.code
        headers = exc.headers
    except (TimeoutError, socket.timeout):
        logger.info("Timeout after %s seconds: %s", timeout, url)
        return ProbeResult(url, "timeout")
    except urllib.error.URLError as exc:
        if isinstance(exc.reason, (TimeoutError, socket.timeout)):
            return ProbeResult(url, "timeout")
        return ProbeResult(url, "error", error=str(exc.reason))
    except OSError as exc:
        return ProbeResult(url, "error", error=str(exc))

    length = headers.get("Content-Length") if headers else None
    return ProbeResult(
        url,
        "success" if code == 200 else "failed",
        http_status=code,
        content_type=headers.get("Content-Type") if headers else None,
        content_length=int(length) if length and length.isdigit() else None,
    )


def probe_all(urls: Iterable[str], timeout: float = PROBE_TIMEOUT) -> list[ProbeResult]:
    """Probe urls one at a time, in order."""
    results = []
    for url in urls:
        logger.info("Testing: %s", url)
        result = probe(url, timeout)
        logger.info("  -> %s%s", result.status,
                    f" ({result.http_status})" if result.http_status else "")
        results.append(result)
    return results


def summarize(results: list[ProbeResult]) -> tuple[list[ProbeResult], list[ProbeResult]]:
    """Split results into (working, failed), preserving order."""
    working = [r for r in results if r.ok]
    failed = [r for r in results if not r.ok]
    return working, failed
