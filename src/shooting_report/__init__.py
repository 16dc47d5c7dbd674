# src/shooting_report/__init__.py
# NYPD shooting incident report: cleaning, monthly aggregation,
# seasonal decomposition and borough risk scoring.

__version__ = "0.1.0"
