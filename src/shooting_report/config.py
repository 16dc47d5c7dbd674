# src/shooting_report/config.py
# Static configuration for the report pipeline. Everything here is a plain
# module constant; a run is fully determined by these values.

from pathlib import Path

# ============================================================
# Paths (robust no matter where you run from)
# ============================================================
PACKAGE_DIR = Path(__file__).resolve().parent   # .../src/shooting_report
ROOT_DIR = PACKAGE_DIR.parents[1]               # project root
RAW_DIR = ROOT_DIR / "data" / "raw"
DATA_DIR = ROOT_DIR / "data" / "processed"
FIGURES_DIR = ROOT_DIR / "reports" / "figures"

RAW_FILE = RAW_DIR / "nypd_shooting_incidents.csv"

INCIDENTS_FILE = DATA_DIR / "incidents_clean.parquet"
MONTHLY_FILE = DATA_DIR / "monthly_incidents.parquet"
MONTHLY_BORO_FILE = DATA_DIR / "monthly_borough.parquet"
HOURLY_WEEKDAY_FILE = DATA_DIR / "hourly_weekday_counts.parquet"
DECOMPOSITION_FILE = DATA_DIR / "decomposition.parquet"
SEASONAL_EFFECTS_FILE = DATA_DIR / "seasonal_effects.parquet"
RISK_FILE = DATA_DIR / "borough_risk.parquet"

# ============================================================
# Source
# ============================================================
SOURCE_URL = "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"
FETCH_TIMEOUT_SECONDS = 60

# ============================================================
# Cleaning
# ============================================================
DROP_COLUMNS = [
    "INCIDENT_KEY",
    "LOC_OF_OCCUR_DESC",
    "JURISDICTION_CODE",
    "LOC_CLASSFCTN_DESC",
    "LOCATION_DESC",
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
]

DATE_FIELD = "OCCUR_DATE"
TIME_FIELD = "OCCUR_TIME"
CATEGORY_FIELD = "BORO"
SEVERE_FIELD = "STATISTICAL_MURDER_FLAG"

REQUIRED_COLUMNS = [DATE_FIELD, TIME_FIELD, CATEGORY_FIELD, SEVERE_FIELD]

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%H:%M:%S"

# False: drop rows whose date/time does not parse and report them.
# True: abort the load on the first such row.
STRICT_PARSING = False

# ============================================================
# Analysis
# ============================================================
SEASONAL_PERIOD = 12
RISK_WEIGHT = 2
