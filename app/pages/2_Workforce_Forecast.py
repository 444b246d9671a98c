from __future__ import annotations

import io

import pandas as pd
import streamlit as st

from bpo_staffing.errors import DomainError
from bpo_staffing.forecast import staff_forecast, summarize_forecast
from bpo_staffing.io import read_forecast_csv
from bpo_staffing.kv import configure_logging, load_settings
from bpo_staffing.shrinkage import ShrinkageFactors
from bpo_staffing.validation import validate_forecasts


settings = load_settings()
configure_logging(settings)

st.set_page_config(page_title="Workforce Forecast", layout="wide")
st.title("Workforce Forecasting")
st.caption("Upload a demand forecast and staff every interval with Erlang-C.")

with st.sidebar:
    st.header("Service Target")
    target_sl = st.slider("Service Level target (%)", 50.0, 99.0, 80.0, 1.0)
    target_time = st.number_input("Target answer time (seconds)", min_value=0.0, value=20.0, step=1.0)

    st.divider()
    st.header("Shrinkage (minutes/day)")
    use_shrinkage = st.checkbox("Convert to scheduled headcount", value=True)
    factors = None
    if use_shrinkage:
        factors = ShrinkageFactors(
            breaks=st.number_input("Breaks", min_value=0.0, value=30.0, step=5.0),
            lunch=st.number_input("Lunch", min_value=0.0, value=30.0, step=5.0),
            training=st.number_input("Training", min_value=0.0, value=60.0, step=5.0),
            meetings=st.number_input("Meetings", min_value=0.0, value=30.0, step=5.0),
            other=st.number_input("Other", min_value=0.0, value=0.0, step=5.0),
        )


uploaded = st.file_uploader("Upload demand forecast CSV", type=["csv"])
if uploaded is None:
    st.info(
        "CSV columns required: forecast_date, interval_start, interval_end, channel, "
        "predicted_volume, predicted_aht (minutes). Optional: confidence_level."
    )
    st.stop()

try:
    df = read_forecast_csv(uploaded)
    flagged = validate_forecasts(df)
except ValueError as e:
    st.error(f"Could not read forecast: {e}")
    st.stop()

channels = ["all channels"] + sorted(df["channel"].unique().tolist())
channel = st.selectbox("Channel", channels, index=0)
if channel != "all channels":
    df = df[df["channel"] == channel].reset_index(drop=True)
    flagged = flagged[flagged["channel"] == channel].reset_index(drop=True)

flag_cols = [c for c in flagged.columns if c.startswith("flag_")]
n_flagged = int(flagged[flag_cols].any(axis=1).sum())
if n_flagged:
    st.warning(f"{n_flagged} forecast rows have data issues (see flag columns).")
    with st.expander("Flagged rows", expanded=False):
        st.dataframe(flagged[flagged[flag_cols].any(axis=1)], use_container_width=True)


# --------------------------
# Summary
# --------------------------
summary = summarize_forecast(
    df,
    interval_minutes=settings.forecast_interval_minutes,
    buffer=settings.quick_staffing_buffer,
)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total Predicted Volume", f"{summary['total_predicted_volume']:.0f}")
c2.metric("Average AHT (min)", f"{summary['average_aht']:.1f}")
c3.metric("Quick Estimate (agents)", f"{summary['quick_required_agents']}")
c4.metric(
    "Peak Interval",
    "—" if summary["peak_interval_start"] is None else f"{summary['peak_interval_start']}",
    None if summary["peak_volume"] is None else f"{summary['peak_volume']:.0f} calls",
)


# --------------------------
# Per-interval staffing
# --------------------------
try:
    out = staff_forecast(
        df,
        target_service_level=float(target_sl),
        target_answer_time=float(target_time),
        interval_minutes=settings.forecast_interval_minutes,
        shrinkage=factors,
        shift_minutes=settings.shift_minutes,
        max_agents=settings.max_agents,
        buffer=settings.quick_staffing_buffer,
    )
except DomainError as e:
    st.error(str(e))
    st.stop()

st.subheader("Interval Staffing")
st.dataframe(out, use_container_width=True)

errors = int(out["required_agents"].isna().sum())
s1, s2, s3 = st.columns(3)
s1.metric("Intervals", f"{len(out)}")
s2.metric("Intervals with errors", f"{errors}")
s3.metric(
    "Peak required agents",
    f"{pd.to_numeric(out['required_agents'], errors='coerce').max():.0f}" if len(out) and errors < len(out) else "—",
)

buf = io.StringIO()
out.to_csv(buf, index=False)
st.download_button(
    label="Download staffing CSV",
    data=buf.getvalue(),
    file_name="forecast_staffing.csv",
    mime="text/csv",
)
