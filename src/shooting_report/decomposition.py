# src/shooting_report/decomposition.py
"""
Classical additive seasonal decomposition of a monthly count series.

    observed = trend + seasonal + residual

The trend is a centered moving average of one period. For an even period
(12 for monthly data) that is the 2xP moving average: P + 1 weights, the
two end terms weighted 1/2P and the rest 1/P, so every window stays
centered on a real month. The first and last P // 2 points have no trend
and therefore no residual.

Seasonal figures are the per-month-of-year means of the detrended series,
shifted so the P figures sum to zero, then tiled over the whole series.
"""

import calendar
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from . import config
from .errors import InsufficientData, InvalidInput

COMPONENT_COLUMNS = ["month", "observed", "trend", "seasonal", "residual"]


@dataclass(frozen=True)
class DecompositionResult:
    """Components aligned to the input months plus the P normalized seasonal figures."""

    components: pd.DataFrame
    seasonal_effects: pd.DataFrame
    period: int

    @property
    def figures(self) -> pd.Series:
        """Seasonal figure per calendar position (1..P), in calendar order."""
        return self.seasonal_effects.set_index("month_of_year")["effect"].sort_index()


def centered_moving_average(values: np.ndarray, period: int) -> np.ndarray:
    n = len(values)
    if period % 2 == 0:
        weights = np.full(period + 1, 1.0 / period)
        weights[0] = weights[-1] = 0.5 / period
    else:
        weights = np.full(period, 1.0 / period)

    half = period // 2
    trend = np.full(n, np.nan)
    if n >= len(weights):
        # Weights are symmetric, so convolution equals correlation here.
        trend[half:n - half] = np.convolve(values, weights, mode="valid")
    return trend


def _validate(values: np.ndarray, start: Tuple[int, int], period: int) -> None:
    if not 1 <= start[1] <= 12:
        raise InvalidInput("start month must be in 1..12", {"start": start})
    if period < 2:
        raise InvalidInput("period must be at least 2", {"period": period})
    if not np.all(np.isfinite(values)):
        raise InvalidInput("counts must be finite", {"index": int(np.argmin(np.isfinite(values)))})
    if np.any(values < 0):
        bad = int(np.argmax(values < 0))
        raise InvalidInput("counts must be non-negative", {"index": bad, "value": float(values[bad])})
    if len(values) < 2 * period:
        raise InsufficientData(len(values), period)


def decompose(counts: Sequence[float], start: Tuple[int, int], period: int = config.SEASONAL_PERIOD) -> DecompositionResult:
    """Decompose ``counts`` whose first value belongs to ``start`` = (year, month)."""
    values = np.asarray(counts, dtype=float)
    _validate(values, start, period)

    year, month = start
    n = len(values)

    # Calendar position (0..P-1) of each observation. For monthly data
    # position 0 is January regardless of where the series starts.
    position = (month - 1 + np.arange(n)) % period

    trend = centered_moving_average(values, period)
    detrended = values - trend

    raw = (
        pd.Series(detrended)
          .groupby(position)
          .mean()
          .reindex(range(period))
          .to_numpy()
    )
    figures = raw - np.nanmean(raw)

    seasonal = figures[position]
    residual = values - trend - seasonal

    months = pd.date_range(pd.Timestamp(year=year, month=month, day=1), periods=n, freq="MS")
    components = pd.DataFrame({
        "month": months,
        "observed": values,
        "trend": trend,
        "seasonal": seasonal,
        "residual": residual,
    })

    effects = pd.DataFrame({
        "month_of_year": np.arange(1, period + 1),
        "month_name": [calendar.month_abbr[i] if period == 12 else str(i) for i in range(1, period + 1)],
        "effect": figures,
    })
    effects["magnitude"] = effects["effect"].abs()
    effects = (
        effects.sort_values("magnitude", ascending=False, kind="stable")
               .drop(columns="magnitude")
               .reset_index(drop=True)
    )

    return DecompositionResult(components=components, seasonal_effects=effects, period=period)


def decompose_monthly(monthly: pd.DataFrame, period: int = config.SEASONAL_PERIOD) -> DecompositionResult:
    """Decompose the output of ``monthly.monthly_counts``."""
    need = {"month", "incidents"}
    missing = sorted(need - set(monthly.columns))
    if missing:
        raise ValueError(f"monthly series is missing columns: {missing}")
    if len(monthly) == 0:
        raise InsufficientData(0, period)

    monthly = monthly.sort_values("month")
    first = pd.Timestamp(monthly["month"].iloc[0])
    expected = pd.date_range(first, periods=len(monthly), freq="MS").as_unit("ns")
    if not pd.DatetimeIndex(monthly["month"]).as_unit("ns").equals(expected):
        raise InvalidInput("monthly series is not contiguous first-of-month dates", {"start": first.date()})
    return decompose(monthly["incidents"].to_numpy(), (first.year, first.month), period=period)
