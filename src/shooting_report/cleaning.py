# src/shooting_report/cleaning.py
"""
Ingestion & cleaning of the raw incident table.

Every function takes a frame and returns a new one; the input is never
modified. Date/time failures follow one policy for the whole load:
strict raises ParseFailure on the first bad cell, lenient drops the row
and records (row, field, value) in ``CleaningResult.dropped``.
"""

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from . import config
from .categories import CATEGORY_FIELDS, to_categorical
from .errors import ParseFailure

DROPPED_COLUMNS = ["row", "field", "value"]

_TRUE_TEXT = {"TRUE", "Y", "YES", "1"}
_FALSE_TEXT = {"FALSE", "N", "NO", "0"}


@dataclass(frozen=True)
class CleaningResult:
    frame: pd.DataFrame
    dropped: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=DROPPED_COLUMNS))

    @property
    def dropped_rows(self) -> int:
        return int(self.dropped["row"].nunique()) if len(self.dropped) else 0


def check_required_columns(df: pd.DataFrame, required=None) -> None:
    required = config.REQUIRED_COLUMNS if required is None else required
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"raw incidents are missing required columns: {missing}")


def drop_low_value_columns(df: pd.DataFrame, columns=None) -> pd.DataFrame:
    columns = config.DROP_COLUMNS if columns is None else columns
    present = [c for c in columns if c in df.columns]
    return df.drop(columns=present)


def _handle_bad_cells(df, parsed, bad, column, strict):
    """Apply the failure policy to the rows flagged in ``bad``."""
    if not bad.any():
        out = df.copy()
        out[column] = parsed
        return out, pd.DataFrame(columns=DROPPED_COLUMNS)

    if strict:
        row = bad[bad].index[0]
        raise ParseFailure(row=row, field=column, value=df.at[row, column])

    dropped = pd.DataFrame({
        "row": bad[bad].index,
        "field": column,
        "value": df.loc[bad, column].to_numpy(),
    })
    out = df.loc[~bad].copy()
    out[column] = parsed[~bad]
    return out, dropped


def parse_occurrence_dates(df: pd.DataFrame, strict: bool = False):
    """Parse OCCUR_DATE (month/day/year) into datetime64. Returns (frame, dropped)."""
    column = config.DATE_FIELD
    parsed = pd.to_datetime(df[column], format=config.DATE_FORMAT, errors="coerce")
    return _handle_bad_cells(df, parsed, parsed.isna(), column, strict)


def parse_occurrence_times(df: pd.DataFrame, strict: bool = False):
    """Parse OCCUR_TIME (hour:minute:second) into a time-of-day timedelta."""
    column = config.TIME_FIELD
    text = df[column].astype("string").str.strip()
    # Minutes/seconds above 59 would otherwise roll over into the next unit.
    well_formed = text.str.fullmatch(r"([01]?\d|2[0-3]):[0-5]\d:[0-5]\d").fillna(False).astype(bool)
    candidates = pd.Series(np.where(well_formed, text.fillna(""), None), index=df.index, dtype=object)
    parsed = pd.to_timedelta(candidates, errors="coerce")
    bad = parsed.isna() | (parsed < pd.Timedelta(0)) | (parsed >= pd.Timedelta(days=1))
    return _handle_bad_cells(df, parsed, bad, column, strict)


def coerce_categories(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for column, enum_cls in CATEGORY_FIELDS.items():
        if column in df.columns:
            df[column] = to_categorical(df[column], enum_cls)
    return df


def parse_severity(df: pd.DataFrame) -> pd.DataFrame:
    """Map textual true/false to a nullable boolean; anything else becomes <NA>."""
    column = config.SEVERE_FIELD
    text = df[column].astype("string").str.strip().str.upper()
    flag = pd.Series(pd.NA, index=df.index, dtype="boolean")
    flag[text.isin(_TRUE_TEXT).fillna(False).astype(bool)] = True
    flag[text.isin(_FALSE_TEXT).fillna(False).astype(bool)] = False
    df = df.copy()
    df[column] = flag
    return df


def clean_incidents(raw: pd.DataFrame, strict=None) -> CleaningResult:
    strict = config.STRICT_PARSING if strict is None else strict

    check_required_columns(raw)

    df = drop_low_value_columns(raw)
    df, bad_dates = parse_occurrence_dates(df, strict=strict)
    df, bad_times = parse_occurrence_times(df, strict=strict)
    df = coerce_categories(df)
    df = parse_severity(df)

    frames = [d for d in (bad_dates, bad_times) if len(d)]
    dropped = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(columns=DROPPED_COLUMNS)
    return CleaningResult(frame=df, dropped=dropped)
