"""Tests for retrieving the raw CSV (network calls are mocked)."""

import pytest
import requests

from shooting_report import fetch
from shooting_report.errors import SourceUnavailable

CSV_TEXT = (
    "INCIDENT_KEY,OCCUR_DATE,OCCUR_TIME,BORO,STATISTICAL_MURDER_FLAG,PERP_AGE_GROUP\n"
    "1,01/15/2020,21:05:00,BRONX,false,(null)\n"
    "2,02/01/2020,03:00:00,QUEENS,true,\n"
)

URL = "https://example.test/rows.csv"


class _FakeResponse:
    def __init__(self, text: str = CSV_TEXT, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class TestDownload:
    def test_reads_csv_as_text(self, monkeypatch) -> None:
        calls = {}

        def fake_get(url, timeout):
            calls["url"], calls["timeout"] = url, timeout
            return _FakeResponse()

        monkeypatch.setattr(fetch.requests, "get", fake_get)
        df = fetch.load_raw_incidents(URL)

        assert calls["url"] == URL
        assert calls["timeout"] > 0
        assert list(df["INCIDENT_KEY"]) == ["1", "2"]
        assert df["PERP_AGE_GROUP"].iloc[0] == "(null)"
        assert df["PERP_AGE_GROUP"].isna().iloc[1]

    def test_download_is_cached(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(fetch.requests, "get", lambda url, timeout: _FakeResponse())
        cache = tmp_path / "raw" / "incidents.csv"
        fetch.load_raw_incidents(URL, cache_file=cache)
        assert cache.read_text(encoding="utf-8") == CSV_TEXT

    def test_http_error_is_source_unavailable(self, monkeypatch) -> None:
        monkeypatch.setattr(fetch.requests, "get", lambda url, timeout: _FakeResponse(status_code=503))
        with pytest.raises(SourceUnavailable) as exc:
            fetch.load_raw_incidents(URL)
        assert exc.value.details["status"] == 503
        assert exc.value.source == URL

    def test_timeout_is_source_unavailable(self, monkeypatch) -> None:
        def fake_get(url, timeout):
            raise requests.Timeout("slow")

        monkeypatch.setattr(fetch.requests, "get", fake_get)
        with pytest.raises(SourceUnavailable, match="timed out"):
            fetch.load_raw_incidents(URL)

    def test_connection_error_is_source_unavailable(self, monkeypatch) -> None:
        def fake_get(url, timeout):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(fetch.requests, "get", fake_get)
        with pytest.raises(SourceUnavailable):
            fetch.load_raw_incidents(URL)


class TestLocalFile:
    def test_reads_local_csv(self, tmp_path) -> None:
        path = tmp_path / "incidents.csv"
        path.write_text(CSV_TEXT, encoding="utf-8")
        df = fetch.load_raw_incidents(str(path))
        assert len(df) == 2
        assert df["BORO"].tolist() == ["BRONX", "QUEENS"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(SourceUnavailable) as exc:
            fetch.load_raw_incidents(tmp_path / "nope.csv")
        assert exc.value.to_dict()["step"] == "fetch"

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SourceUnavailable):
            fetch.load_raw_incidents(path)
