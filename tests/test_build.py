"""End-to-end build from a local CSV into parquet artifacts and HTML charts."""

import pandas as pd
import pytest

from shooting_report import build_report_artifacts, config, fetch
from shooting_report.errors import ParseFailure

from conftest import monthly_rows, raw_row


def _write_csv(path, rows) -> str:
    pd.DataFrame(rows).to_csv(path, index=False)
    return str(path)


@pytest.fixture
def two_years_csv(tmp_path):
    rows = monthly_rows(2019, 1, [3, 1, 2, 0, 4, 5, 6, 2, 1, 0, 2, 3] * 2 + [1, 2])
    rows += monthly_rows(2019, 6, [1, 1], BORO="QUEENS", STATISTICAL_MURDER_FLAG="true")
    rows.append(raw_row(OCCUR_DATE="not a date"))
    return _write_csv(tmp_path / "raw.csv", rows)


class TestBuild:
    def test_writes_all_artifacts(self, tmp_path, two_years_csv) -> None:
        written = build_report_artifacts.main(
            source=two_years_csv,
            data_dir=tmp_path / "processed",
            figures_dir=tmp_path / "figures",
        )
        for key in ("incidents", "monthly", "monthly_borough", "hourly_weekday",
                    "risk", "decomposition", "seasonal_effects"):
            assert written[key].exists(), key
        assert (tmp_path / "figures" / "decomposition.html").exists()
        assert (tmp_path / "figures" / "risk_scores.html").exists()

        monthly = pd.read_parquet(written["monthly"])
        incidents = pd.read_parquet(written["incidents"])
        assert len(monthly) == 26
        assert int(monthly["incidents"].sum()) == len(incidents)

        risk = pd.read_parquet(written["risk"])
        assert risk["category"].iloc[0] == "QUEENS"

    def test_short_series_skips_decomposition(self, tmp_path) -> None:
        source = _write_csv(tmp_path / "raw.csv", monthly_rows(2020, 1, [2, 1, 3]))
        written = build_report_artifacts.main(
            source=source,
            data_dir=tmp_path / "processed",
            figures_dir=tmp_path / "figures",
        )
        assert "decomposition" not in written
        assert written["risk"].exists()
        assert not (tmp_path / "figures" / "decomposition.html").exists()

    def test_strict_build_aborts_on_bad_date(self, tmp_path, two_years_csv) -> None:
        with pytest.raises(ParseFailure):
            build_report_artifacts.main(
                source=two_years_csv,
                data_dir=tmp_path / "processed",
                figures_dir=tmp_path / "figures",
                strict=True,
            )

    def test_download_cached_beside_redirected_output(self, tmp_path, monkeypatch) -> None:
        text = pd.DataFrame(monthly_rows(2020, 1, [2, 1, 3])).to_csv(index=False)

        class _Response:
            def __init__(self) -> None:
                self.text = text
                self.status_code = 200

            def raise_for_status(self) -> None:
                pass

        monkeypatch.setattr(fetch.requests, "get", lambda url, timeout: _Response())
        build_report_artifacts.main(
            source="https://example.test/rows.csv",
            data_dir=tmp_path / "data" / "processed",
            figures_dir=tmp_path / "figures",
        )
        cached = tmp_path / "data" / "raw" / config.RAW_FILE.name
        assert cached.read_text(encoding="utf-8") == text
