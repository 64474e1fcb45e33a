# test_io.py
"""
Unit tests for cityblocks.model.io

Covers:
- from_text: header dropped, quoted thousands-separated cells, bad rows skipped,
  year index and global max derived.
- fetch_text / load for files: missing file, UTF-8 BOM, default source.
- fetch_text / load for URLs: requests.get mocked, HTTP errors wrapped.
"""

from pathlib import Path

import pytest
import requests

from cityblocks.model import io as mod
from cityblocks.model.io import DatasetLoader, DatasetLoadError


# ---------- helpers ----------
class FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


# ---------- from_text ----------
def test_from_text_parses_and_partitions(csv_text):
    ds = DatasetLoader.from_text(csv_text)
    assert ds.header[0] == "City"
    assert [r.city for r in ds.records] == ["Oslo", "Paris", "Houston", "Oslo"]
    assert ds.year_index.years() == [2014, 2015, 2017]
    assert ds.global_max == 40600000


def test_from_text_header_only():
    ds = DatasetLoader.from_text("City,Year,E,PC,Pop,YR,M\n")
    assert ds.records == []
    assert len(ds.year_index) == 0
    assert ds.global_max == 0


def test_from_text_empty_string():
    ds = DatasetLoader.from_text("")
    assert ds.header == []
    assert ds.records == []


def test_from_text_ignores_trailing_blank_lines(csv_text):
    ds = DatasetLoader.from_text(csv_text + "\n\n")
    assert len(ds.records) == 4


# ---------- files ----------
def test_load_file(tmp_path: Path, csv_text):
    path = tmp_path / "data.csv"
    path.write_text(csv_text, encoding="utf-8")
    ds = DatasetLoader.load(str(path))
    assert ds.source == str(path)
    assert len(ds.records) == 4


def test_load_file_with_bom(tmp_path: Path, csv_text):
    path = tmp_path / "data.csv"
    path.write_bytes(b"\xef\xbb\xbf" + csv_text.encode("utf-8"))
    ds = DatasetLoader.load(str(path))
    assert ds.header[0] == "City"


def test_load_missing_file_raises(tmp_path: Path):
    with pytest.raises(DatasetLoadError):
        DatasetLoader.load(str(tmp_path / "nope.csv"))


def test_load_undecodable_file_raises(tmp_path: Path):
    path = tmp_path / "data.csv"
    path.write_bytes(b"\xff\xfe\x00\x81garbage")
    with pytest.raises(DatasetLoadError):
        DatasetLoader.load(str(path))


def test_load_defaults_to_bundled_dataset(monkeypatch, tmp_path: Path, csv_text):
    path = tmp_path / "bundled.csv"
    path.write_text(csv_text, encoding="utf-8")
    monkeypatch.setattr(mod, "DEFAULT_DATA_PATH", str(path))
    ds = DatasetLoader.load()
    assert ds.source == str(path)


# ---------- URLs ----------
def test_load_url_uses_requests(monkeypatch, csv_text):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(csv_text)

    monkeypatch.setattr(mod.requests, "get", fake_get)
    ds = DatasetLoader.load("https://example.org/data.csv")
    assert calls == [("https://example.org/data.csv", mod.HTTP_TIMEOUT)]
    assert len(ds.records) == 4


def test_load_url_http_error_is_wrapped(monkeypatch):
    monkeypatch.setattr(mod.requests, "get", lambda url, timeout: FakeResponse("", status=404))
    with pytest.raises(DatasetLoadError) as exc:
        DatasetLoader.load("http://example.org/missing.csv")
    assert isinstance(exc.value.__cause__, requests.HTTPError)


def test_load_url_connection_error_is_wrapped(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(mod.requests, "get", boom)
    with pytest.raises(DatasetLoadError):
        DatasetLoader.load("https://example.org/data.csv")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("https://x/data.csv", True),
        ("HTTP://x/data.csv", True),
        ("data.csv", False),
        ("/tmp/http.csv", False),
    ],
)
def test_is_url(source, expected):
    assert mod.is_url(source) is expected
