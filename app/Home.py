import streamlit as st

from bpo_staffing.kv import configure_logging, load_settings

configure_logging(load_settings())

st.set_page_config(page_title="BPO Staffing (Erlang-C)", layout="wide")

st.title("BPO Staffing (Erlang-C)")
st.write(
    """
This app computes **required agents per interval** using an Erlang-C staffing engine.

Included:
- Erlang C Calculator (required agents, service level, ASA, occupancy, probability of wait)
- Shrinkage calculator (breaks, lunch, training, meetings → scheduled headcount)
- Staffing scenarios (what if I staff N agents?)
- Workforce Forecast (CSV upload → per-interval staffing)
"""
)

st.info("Use the left sidebar to navigate to the calculator or the forecast page.")
