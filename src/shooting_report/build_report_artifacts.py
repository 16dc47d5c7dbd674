# src/shooting_report/build_report_artifacts.py
# Batch build: fetch -> clean -> aggregate -> decompose -> score -> write
# parquet artifacts and HTML charts. The dashboard reads only these artifacts.
#
#   python -m shooting_report.build_report_artifacts

from pathlib import Path

import pandas as pd

from . import charts, config
from .cleaning import clean_incidents
from .decomposition import decompose_monthly
from .errors import InsufficientData
from .fetch import load_raw_incidents
from .monthly import hourly_weekday_counts, monthly_counts, monthly_counts_by_category
from .risk import category_risk_summary


def _write(df: pd.DataFrame, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False)
    print("Wrote:", path)
    print("Shape:", df.shape)
    return path


def _clean_for_parquet(df: pd.DataFrame) -> pd.DataFrame:
    # Categoricals are stored as plain strings so readers don't depend on the enum layout.
    out = df.copy()
    for column in out.columns:
        if isinstance(out[column].dtype, pd.CategoricalDtype):
            out[column] = out[column].astype(str)
    return out


def main(source=None, data_dir=None, figures_dir=None, strict=None) -> dict:
    source = config.SOURCE_URL if source is None else source
    data_dir = config.DATA_DIR if data_dir is None else Path(data_dir)
    figures_dir = config.FIGURES_DIR if figures_dir is None else Path(figures_dir)

    print("Loading incidents from:", source)
    raw = load_raw_incidents(source, cache_file=data_dir.parent / "raw" / config.RAW_FILE.name)
    print("Raw shape:", raw.shape)

    cleaned = clean_incidents(raw, strict=strict)
    df = cleaned.frame
    if cleaned.dropped_rows:
        print(f"Dropped {cleaned.dropped_rows} row(s) with unparseable date/time:")
        print(cleaned.dropped.head(20).to_string(index=False))

    written = {}
    written["incidents"] = _write(_clean_for_parquet(df), data_dir / config.INCIDENTS_FILE.name)

    monthly = monthly_counts(df)
    written["monthly"] = _write(monthly, data_dir / config.MONTHLY_FILE.name)

    monthly_boro = monthly_counts_by_category(df)
    written["monthly_borough"] = _write(monthly_boro, data_dir / config.MONTHLY_BORO_FILE.name)

    hw = hourly_weekday_counts(df)
    written["hourly_weekday"] = _write(hw, data_dir / config.HOURLY_WEEKDAY_FILE.name)

    risk = category_risk_summary(df)
    written["risk"] = _write(risk, data_dir / config.RISK_FILE.name)

    figures = {
        "incidents_by_borough": charts.incidents_by_category_figure(monthly_boro),
        "incidents_over_time": charts.incidents_over_time_figure(monthly),
        "risk_scores": charts.risk_scores_figure(risk),
        "hour_weekday_heatmap": charts.hour_weekday_heatmap(hw),
    }

    # Decomposition failing is fatal for that step only.
    try:
        result = decompose_monthly(monthly)
    except InsufficientData as e:
        print("Skipping decomposition:", e)
    else:
        written["decomposition"] = _write(result.components, data_dir / config.DECOMPOSITION_FILE.name)
        written["seasonal_effects"] = _write(result.seasonal_effects, data_dir / config.SEASONAL_EFFECTS_FILE.name)
        figures["decomposition"] = charts.decomposition_figure(result.components)

    for path in charts.write_figures(figures, figures_dir):
        print("Wrote:", path)
        written[f"figure:{path.stem}"] = path

    return written


if __name__ == "__main__":
    main()
