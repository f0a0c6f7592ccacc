import csv
import gzip
import io
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

import stella.sources as sources_module
from stella.config import PipelineConfig
from stella.errors import DownloadFailed

FIELDS = ["id", "hip", "proper", "ra", "dec", "dist", "mag", "spect", "con"]

SAMPLE_ROWS = [
    # Sun: id 0, hours ra 0
    {"id": "0", "proper": "Sol", "ra": "0.0", "dec": "0.0", "dist": "0.0000", "mag": "-26.7", "spect": "G2V", "con": ""},
    {"id": "32263", "proper": "Sirius", "ra": "6.752481", "dec": "-16.716116", "dist": "2.6371", "mag": "-1.44", "spect": "A0m...", "con": "CMa"},
    {"id": "27919", "proper": "Betelgeuse", "ra": "5.919529", "dec": "7.407063", "dist": "152.6718", "mag": "0.45", "spect": "M2Ib", "con": "Ori"},
    {"id": "100", "proper": "", "ra": "10", "dec": "12.5", "dist": "5", "mag": "4.0", "spect": "", "con": ""},
    {"id": "101", "proper": "", "ra": "200", "dec": "-5", "dist": "", "mag": "5.5", "spect": "K0", "con": "Vir"},
    # too faint
    {"id": "102", "proper": "Faint", "ra": "3.0", "dec": "1.0", "dist": "10", "mag": "6.5", "spect": "", "con": ""},
    {"id": "103", "proper": "", "ra": "3.0", "dec": "1.0", "dist": "10", "mag": "9.1", "spect": "", "con": ""},
    # malformed coordinates
    {"id": "104", "proper": "", "ra": "", "dec": "1.0", "dist": "", "mag": "2.0", "spect": "", "con": ""},
    {"id": "105", "proper": "", "ra": "4.0", "dec": "north", "dist": "", "mag": "2.0", "spect": "", "con": ""},
]


def make_csv(rows: list[dict]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=FIELDS, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: row.get(k, "") for k in FIELDS})
    return buf.getvalue()


@pytest.fixture
def sample_csv_text() -> str:
    return make_csv(SAMPLE_ROWS)


@pytest.fixture
def sample_gz_bytes(sample_csv_text) -> bytes:
    return gzip.compress(sample_csv_text.encode("utf-8"))


class FakeNetwork:
    """Stands in for stella.sources.download. Unknown urls answer 404."""

    def __init__(self):
        self.calls: list[str] = []
        self.responses: dict[str, bytes | Exception] = {}

    def download(self, url: str, dest: Path, timeout: float) -> int:
        self.calls.append(url)
        result = self.responses.get(url, DownloadFailed("status 404"))
        if isinstance(result, Exception):
            raise result
        dest.write_bytes(result)
        return len(result)


@pytest.fixture
def fake_network(monkeypatch) -> FakeNetwork:
    net = FakeNetwork()
    monkeypatch.setattr(sources_module, "download", net.download)
    return net


@pytest.fixture
def make_config(tmp_path):
    def _make(sources, **kwargs) -> PipelineConfig:
        kwargs.setdefault("min_bytes", 10)
        return PipelineConfig(sources=tuple(sources), work_dir=tmp_path, **kwargs)
    return _make


class _CatalogHandler(BaseHTTPRequestHandler):
    """Serves server.routes: path -> (status, body, mode).

    mode "truncated" announces a chunked body longer than what is sent,
    then drops the connection.
    """

    protocol_version = "HTTP/1.1"

    def do_GET(self):
        self.server.user_agents.append(self.headers.get("User-Agent"))
        status, body, mode = self.server.routes.get(self.path, (404, b"not found", "plain"))
        self.send_response(status)
        if mode == "truncated":
            self.send_header("Transfer-Encoding", "chunked")
            self.send_header("Connection", "close")
            self.end_headers()
            self.wfile.write(b"%x\r\n" % (len(body) + 100) + body)
            self.close_connection = True
            return
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def catalog_server():
    """Local HTTP server. Register responses in server.routes, build urls with server.url(path)."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _CatalogHandler)
    server.routes = {}
    server.user_agents = []
    server.url = lambda path: f"http://127.0.0.1:{server.server_address[1]}{path}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()
