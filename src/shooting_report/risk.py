# src/shooting_report/risk.py
# Per-category severity counts and the weighted risk ranking.
#
#   severe_rate = 100 * severe / total      (0 when total is 0)
#   risk_score  = severe_rate * weight
#
# Rows with a missing/unparsed severity flag count towards the total but not
# towards ``severe``; they are reported in ``unknown_severity``.

import pandas as pd

from . import config
from .categories import CATEGORY_FIELDS, labels


def severity_counts(df: pd.DataFrame, category: str = config.CATEGORY_FIELD, include_empty: bool = False) -> pd.DataFrame:
    """total / severe / unknown_severity per category, in group encounter order."""
    flags = df[config.SEVERE_FIELD].astype("boolean")
    work = pd.DataFrame({
        "category": df[category].astype(str),
        "severe": flags.fillna(False).astype(bool),
        "unknown_severity": flags.isna(),
    })

    counts = (
        work.groupby("category", sort=False)
            .agg(
                total=("severe", "size"),
                severe=("severe", "sum"),
                unknown_severity=("unknown_severity", "sum"),
            )
            .reset_index()
    )

    if include_empty and category in CATEGORY_FIELDS:
        absent = [c for c in labels(CATEGORY_FIELDS[category]) if c not in set(counts["category"])]
        if absent:
            empty = pd.DataFrame({"category": absent, "total": 0, "severe": 0, "unknown_severity": 0})
            counts = pd.concat([counts, empty], ignore_index=True)

    for column in ("total", "severe", "unknown_severity"):
        counts[column] = counts[column].astype("int64")
    return counts


def score_categories(counts: pd.DataFrame, weight: float = config.RISK_WEIGHT) -> pd.DataFrame:
    """Add severe_rate, risk_score and rank; sorted by risk_score descending (stable)."""
    need = {"category", "total", "severe"}
    missing = sorted(need - set(counts.columns))
    if missing:
        raise ValueError(f"category counts are missing columns: {missing}")
    if (counts["total"] < 0).any() or (counts["severe"] < 0).any():
        raise ValueError("category counts must be non-negative")
    if (counts["severe"] > counts["total"]).any():
        raise ValueError("severe count exceeds total for some category")

    scored = counts.copy()
    total = scored["total"].astype(float)
    scored["severe_rate"] = (100.0 * scored["severe"] / total.where(total > 0)).fillna(0.0)
    scored["risk_score"] = scored["severe_rate"] * weight

    scored = scored.sort_values("risk_score", ascending=False, kind="stable").reset_index(drop=True)
    scored["rank"] = range(1, len(scored) + 1)
    return scored


def category_risk_summary(
    df: pd.DataFrame,
    weight: float = config.RISK_WEIGHT,
    category: str = config.CATEGORY_FIELD,
    include_empty: bool = False,
) -> pd.DataFrame:
    return score_categories(severity_counts(df, category, include_empty), weight)
