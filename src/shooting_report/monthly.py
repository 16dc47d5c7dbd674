# src/shooting_report/monthly.py
# Count aggregates built from the cleaned incident table.
#
# Every series here is complete: months (or hour/weekday cells) with no
# incidents are present with a 0 count, so downstream code can rely on a
# regular axis.

import pandas as pd

from . import config
from .categories import Borough, labels

WEEKDAY_ORDER = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _month_axis(df: pd.DataFrame) -> pd.Series:
    return df[config.DATE_FIELD].dt.to_period("M").dt.to_timestamp()


def _present_categories(df: pd.DataFrame, column: str) -> list:
    present = set(df[column].astype(str).unique())
    return [c for c in labels(Borough) if c in present] + sorted(present - set(labels(Borough)))


def monthly_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Incidents per first-of-month, zero-filled between the first and last observed month."""
    if len(df) == 0:
        return pd.DataFrame({
            "month": pd.Series(dtype="datetime64[ns]"),
            "incidents": pd.Series(dtype="int64"),
        })

    counts = _month_axis(df).value_counts()
    axis = pd.date_range(counts.index.min(), counts.index.max(), freq="MS")

    monthly = (
        counts.reindex(axis, fill_value=0)
              .rename_axis("month")
              .reset_index(name="incidents")
    )
    monthly["incidents"] = monthly["incidents"].astype("int64")
    return monthly


def monthly_counts_by_category(df: pd.DataFrame, category: str = config.CATEGORY_FIELD) -> pd.DataFrame:
    """Incidents per (month, category); every pair on the monthly axis is present."""
    if len(df) == 0:
        return pd.DataFrame({
            "month": pd.Series(dtype="datetime64[ns]"),
            category: pd.Series(dtype="object"),
            "incidents": pd.Series(dtype="int64"),
        })

    month = _month_axis(df)
    axis = pd.date_range(month.min(), month.max(), freq="MS")
    grid = pd.MultiIndex.from_product(
        [axis, _present_categories(df, category)], names=["month", category]
    )

    counts = (
        pd.DataFrame({"month": month, category: df[category].astype(str)})
          .groupby(["month", category])
          .size()
    )
    out = counts.reindex(grid, fill_value=0).reset_index(name="incidents")
    out["incidents"] = out["incidents"].astype("int64")
    return out


def hourly_weekday_counts(df: pd.DataFrame, category: str = config.CATEGORY_FIELD) -> pd.DataFrame:
    """Incidents per weekday x hour-of-day x category, all 7 x 24 cells present."""
    categories = _present_categories(df, category) if len(df) else []
    grid = pd.MultiIndex.from_product(
        [WEEKDAY_ORDER, range(24), categories], names=["weekday_label", "hour", category]
    )

    cells = pd.DataFrame({
        "weekday_label": df[config.DATE_FIELD].dt.day_name(),
        "hour": (df[config.TIME_FIELD] // pd.Timedelta(hours=1)).astype("int64"),
        category: df[category].astype(str),
    })
    counts = cells.groupby(["weekday_label", "hour", category]).size()

    out = counts.reindex(grid, fill_value=0).reset_index(name="incidents")
    out["incidents"] = out["incidents"].astype("int64")
    return out
