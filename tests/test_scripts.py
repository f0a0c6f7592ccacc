import importlib.util
import logging
import urllib.error
from pathlib import Path

SCRIPTS = Path(__file__).resolve().parents[1] / "scripts"


def _load(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_process_stars_all_sources_fail(tmp_path, fake_network, caplog, capsys):
    process_stars = _load("process_stars")
    caplog.set_level(logging.INFO)
    out = tmp_path / "stella_stars.json"

    code = process_stars.main([
        "--work-dir", str(tmp_path),
        "--out", str(out),
        "--source", "https://mirror-a.invalid/hyg_v42.csv.gz",
        "--source", "https://mirror-b.invalid/hyg_v42.csv.gz",
    ])

    assert code == 1
    assert "All 2 download sources failed" in caplog.text
    assert "Troubleshooting tips" in capsys.readouterr().out
    assert not out.exists()
    assert fake_network.calls == [
        "https://mirror-a.invalid/hyg_v42.csv.gz",
        "https://mirror-b.invalid/hyg_v42.csv.gz",
    ]


def test_process_stars_success(tmp_path, fake_network, sample_gz_bytes, capsys):
    process_stars = _load("process_stars")
    url = "https://mirror-a.invalid/hyg_v42.csv.gz"
    fake_network.responses[url] = sample_gz_bytes

    code = process_stars.main([
        "--work-dir", str(tmp_path), "--source", url, "--min-bytes", "10",
    ])

    assert code == 0
    assert (tmp_path / "stella_stars.json").exists()
    assert "Wrote 5 stars" in capsys.readouterr().out


def test_integrate_stars_missing_html(tmp_path, caplog):
    integrate_stars = _load("integrate_stars")
    catalog = tmp_path / "stella_stars.json"
    catalog.write_text('[{"id": 1, "ra": 1.0, "dec": 1.0, "mag": 1.0}]', encoding="utf-8")
    caplog.set_level(logging.INFO)

    code = integrate_stars.main(["--catalog", str(catalog), "--html", str(tmp_path / "index.html")])

    assert code == 1
    assert "index.html not found" in caplog.text


def test_check_downloads_nothing_works(monkeypatch, capsys):
    check_downloads = _load("check_downloads")

    def urlopen(req, timeout=None):
        raise urllib.error.URLError("Name or service not known")

    monkeypatch.setattr("urllib.request.urlopen", urlopen)

    code = check_downloads.main(["https://a.invalid/x.gz", "https://b.invalid/x.gz"])

    out = capsys.readouterr().out
    assert code == 1
    assert "No working URLs found" in out
    assert "https://b.invalid/x.gz (error)" in out
