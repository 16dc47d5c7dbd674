# dashboard/app.py
# NYPD Shooting Incidents: trends, seasonality and borough risk
# Streamlit dashboard reading precomputed parquet artifacts from data/processed/

import pandas as pd
import streamlit as st

from shooting_report import charts, config


# ============================================================
# Paths
# ============================================================
MONTHLY_FILE = config.MONTHLY_FILE
MONTHLY_BORO_FILE = config.MONTHLY_BORO_FILE
HOURLY_WEEKDAY_FILE = config.HOURLY_WEEKDAY_FILE
RISK_FILE = config.RISK_FILE
DECOMPOSITION_FILE = config.DECOMPOSITION_FILE
SEASONAL_EFFECTS_FILE = config.SEASONAL_EFFECTS_FILE


# ============================================================
# Page config
# ============================================================
st.set_page_config(
    page_title="NYPD Shooting Incidents",
    layout="wide",
)
st.title("NYPD Shooting Incidents")
st.caption("Report dashboard built from precomputed NYPD shooting aggregates (parquet).")


# ============================================================
# Load artifacts
# ============================================================
@st.cache_data(show_spinner="Loading report artifacts...")
def load_artifacts():
    required_files = [
        MONTHLY_FILE,
        MONTHLY_BORO_FILE,
        HOURLY_WEEKDAY_FILE,
        RISK_FILE,
    ]

    missing = [str(p) for p in required_files if not p.exists()]
    if missing:
        raise FileNotFoundError("Missing required artifact(s):\n" + "\n".join(missing))

    mc = pd.read_parquet(MONTHLY_FILE)
    mb = pd.read_parquet(MONTHLY_BORO_FILE)
    hw = pd.read_parquet(HOURLY_WEEKDAY_FILE)
    risk = pd.read_parquet(RISK_FILE)

    # ----------------------------
    # Validate monthly_incidents
    # ----------------------------
    need_mc = {"month", "incidents"}
    miss_mc = sorted(list(need_mc - set(mc.columns)))
    if miss_mc:
        raise ValueError(f"monthly_incidents missing columns: {miss_mc}")
    mc["month"] = pd.to_datetime(mc["month"], errors="coerce")
    mc = mc.dropna(subset=["month"]).sort_values("month")

    # ----------------------------
    # Validate monthly_borough
    # ----------------------------
    need_mb = {"month", config.CATEGORY_FIELD, "incidents"}
    miss_mb = sorted(list(need_mb - set(mb.columns)))
    if miss_mb:
        raise ValueError(f"monthly_borough missing columns: {miss_mb}")
    mb["month"] = pd.to_datetime(mb["month"], errors="coerce")
    mb = mb.dropna(subset=["month"])

    # ----------------------------
    # Validate hourly_weekday_counts
    # ----------------------------
    need_hw = {"weekday_label", "hour", config.CATEGORY_FIELD, "incidents"}
    miss_hw = sorted(list(need_hw - set(hw.columns)))
    if miss_hw:
        raise ValueError(f"hourly_weekday_counts missing columns: {miss_hw}")

    # ----------------------------
    # Validate borough_risk
    # ----------------------------
    need_risk = {"category", "total", "severe", "severe_rate", "risk_score", "rank"}
    miss_risk = sorted(list(need_risk - set(risk.columns)))
    if miss_risk:
        raise ValueError(f"borough_risk missing columns: {miss_risk}")
    risk = risk.sort_values("rank")

    # Decomposition is optional: the build skips it for short series.
    decomp = pd.read_parquet(DECOMPOSITION_FILE) if DECOMPOSITION_FILE.exists() else None
    effects = pd.read_parquet(SEASONAL_EFFECTS_FILE) if SEASONAL_EFFECTS_FILE.exists() else None

    return mc, mb, hw, risk, decomp, effects


try:
    mc, mb, hw, risk, decomp, effects = load_artifacts()
except Exception as e:
    st.error(f"Failed to load report artifacts. Run the build first. Details: {e}")
    st.stop()


# ============================================================
# Sidebar filters
# ============================================================
st.sidebar.header("Filters")

boroughs = sorted(mb[config.CATEGORY_FIELD].unique())
selected_boros = st.sidebar.multiselect(
    "Boroughs",
    options=boroughs,
    default=boroughs,
)

if len(selected_boros) == 0:
    st.warning("Please select at least one borough in the sidebar.")
    st.stop()

mb_filt = mb[mb[config.CATEGORY_FIELD].isin(selected_boros)].copy()
hw_filt = hw[hw[config.CATEGORY_FIELD].isin(selected_boros)].copy()

st.sidebar.markdown("---")
st.sidebar.download_button(
    "Download borough risk table (CSV)",
    data=risk.to_csv(index=False).encode("utf-8"),
    file_name="nypd_borough_risk.csv",
    mime="text/csv",
)


# ============================================================
# Summary metrics
# ============================================================
total_incidents = int(mb_filt["incidents"].sum()) if len(mb_filt) else 0
months_in_view = int(mb_filt["month"].nunique()) if len(mb_filt) else 0
top_risk = risk.iloc[0]["category"] if len(risk) else "n/a"

m1, m2, m3 = st.columns(3)
m1.metric("Total incidents", f"{total_incidents:,}")
m2.metric("Months in view", months_in_view)
m3.metric("Highest risk borough", top_risk)


# ============================================================
# Tabs
# ============================================================
tab1, tab2, tab3, tab4, tab5 = st.tabs(
    ["Counts and Trend", "Seasonality", "Borough Risk", "Hour and Weekday Patterns", "About"]
)


with tab1:
    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(charts.incidents_by_category_figure(mb_filt), use_container_width=True)
    with c2:
        monthly = (
            mb_filt.groupby("month")["incidents"]
                   .sum()
                   .reset_index()
                   .sort_values("month")
        )
        st.plotly_chart(charts.incidents_over_time_figure(monthly), use_container_width=True)


with tab2:
    st.subheader("Citywide seasonal decomposition")
    if decomp is None or effects is None:
        st.info("Decomposition was skipped: fewer than two full years of monthly data.")
    else:
        st.plotly_chart(charts.decomposition_figure(decomp), use_container_width=True)
        c1, c2 = st.columns(2)
        with c1:
            st.plotly_chart(charts.seasonal_effects_figure(effects), use_container_width=True)
        with c2:
            st.subheader("Seasonal effects (largest first)")
            st.dataframe(effects, use_container_width=True, hide_index=True)


with tab3:
    st.subheader("Borough risk ranking")
    st.plotly_chart(charts.risk_scores_figure(risk), use_container_width=True)
    st.dataframe(risk, use_container_width=True, hide_index=True)
    st.caption(
        "Risk score = share of incidents flagged as murders (percent) x a fixed weight. "
        "Incidents with a missing murder flag are counted as not murders and listed under unknown_severity."
    )


with tab4:
    if int(hw_filt["incidents"].sum()) == 0:
        st.info("No hourly-weekday data for the selected boroughs.")
    else:
        st.plotly_chart(charts.hour_weekday_heatmap(hw_filt), use_container_width=True)


with tab5:
    st.subheader("What this dashboard shows")
    st.markdown("""
- The dashboard reads only precomputed parquet artifacts under `data/processed/`.
- Build them with `python -m shooting_report.build_report_artifacts`.
- Borough filters apply to the monthly and hour x weekday aggregates; the decomposition is citywide.
- Source: NYC Open Data, *NYPD Shooting Incident Data (Historic)*.
""")
