"""Shared builders for raw incident tables shaped like the NYPD export."""

import pandas as pd
import pytest


def raw_row(**overrides) -> dict:
    """Return one raw incident row as the CSV loader produces it (all text)."""
    base = {
        "INCIDENT_KEY": "228798151",
        "OCCUR_DATE": "01/15/2020",
        "OCCUR_TIME": "21:05:00",
        "BORO": "BRONX",
        "LOC_OF_OCCUR_DESC": None,
        "PRECINCT": "40",
        "JURISDICTION_CODE": "0",
        "LOC_CLASSFCTN_DESC": None,
        "LOCATION_DESC": None,
        "STATISTICAL_MURDER_FLAG": "false",
        "PERP_AGE_GROUP": "18-24",
        "PERP_SEX": "M",
        "PERP_RACE": "BLACK",
        "VIC_AGE_GROUP": "25-44",
        "VIC_SEX": "M",
        "VIC_RACE": "BLACK",
        "X_COORD_CD": "1006343",
        "Y_COORD_CD": "234270",
        "Latitude": "40.809673",
        "Longitude": "-73.920509",
        "Lon_Lat": "POINT (-73.920509 40.809673)",
    }
    base.update(overrides)
    return base


def monthly_rows(start_year: int, start_month: int, counts: list, **overrides) -> list:
    """``counts[i]`` incidents on the 15th of the i-th month after the start."""
    rows = []
    for i, n in enumerate(counts):
        total = start_year * 12 + (start_month - 1) + i
        year, month = divmod(total, 12)
        for _ in range(n):
            rows.append(raw_row(OCCUR_DATE=f"{month + 1:02d}/15/{year}", **overrides))
    return rows


@pytest.fixture
def make_raw():
    def _make(rows: list) -> pd.DataFrame:
        return pd.DataFrame(rows, dtype=object)
    return _make
