# src/shooting_report/categories.py
"""Closed enumerations for the categorical incident fields.

Each enum lists the labels the source publishes plus an explicit UNKNOWN.
Text that matches no member (blank, "(null)", typos, codes like "1020")
is mapped to UNKNOWN instead of failing the load.
"""

from enum import Enum

import pandas as pd


class Borough(str, Enum):
    BRONX = "BRONX"
    BROOKLYN = "BROOKLYN"
    MANHATTAN = "MANHATTAN"
    QUEENS = "QUEENS"
    STATEN_ISLAND = "STATEN ISLAND"
    UNKNOWN = "UNKNOWN"


class AgeGroup(str, Enum):
    UNDER_18 = "<18"
    AGE_18_24 = "18-24"
    AGE_25_44 = "25-44"
    AGE_45_64 = "45-64"
    AGE_65_PLUS = "65+"
    UNKNOWN = "UNKNOWN"


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "UNKNOWN"


class Race(str, Enum):
    AMERICAN_INDIAN_ALASKAN_NATIVE = "AMERICAN INDIAN/ALASKAN NATIVE"
    ASIAN_PACIFIC_ISLANDER = "ASIAN / PACIFIC ISLANDER"
    BLACK = "BLACK"
    BLACK_HISPANIC = "BLACK HISPANIC"
    WHITE = "WHITE"
    WHITE_HISPANIC = "WHITE HISPANIC"
    UNKNOWN = "UNKNOWN"


# Field name -> enum it is coerced to
CATEGORY_FIELDS = {
    "BORO": Borough,
    "PERP_AGE_GROUP": AgeGroup,
    "PERP_SEX": Sex,
    "PERP_RACE": Race,
    "VIC_AGE_GROUP": AgeGroup,
    "VIC_SEX": Sex,
    "VIC_RACE": Race,
}


def labels(enum_cls) -> list:
    """Category labels in declaration order (UNKNOWN last)."""
    return [m.value for m in enum_cls]


def to_categorical(series: pd.Series, enum_cls) -> pd.Series:
    known = set(labels(enum_cls))
    text = series.astype("string").str.strip().str.upper()
    text = text.where(text.isin(known), enum_cls.UNKNOWN.value)
    return pd.Series(
        pd.Categorical(text, categories=labels(enum_cls)),
        index=series.index,
        name=series.name,
    )
