from __future__ import annotations

import streamlit as st

from bpo_staffing.errors import DomainError
from bpo_staffing.kv import configure_logging, load_settings
from bpo_staffing.shrinkage import ShrinkageFactors, plan_staffing
from bpo_staffing.staffing import scenario_table, staffing_input_from_form


settings = load_settings()
configure_logging(settings)

# -----------------------------
# Page config
# -----------------------------
st.set_page_config(page_title="Erlang C Calculator", layout="wide")
st.title("Erlang C Calculator")
st.caption("Calculate optimal staffing for contact center operations.")


# -----------------------------
# Sidebar controls
# -----------------------------
with st.sidebar:
    st.header("Input Parameters")
    calls = st.number_input("Calls per Interval", min_value=0.0, value=100.0, step=1.0)
    aht = st.number_input("Average Handle Time (minutes)", min_value=0.1, value=5.0, step=0.1)
    interval_minutes = st.number_input("Interval Length (minutes)", min_value=1.0, value=30.0, step=1.0)
    target_sl = st.number_input("Target Service Level (%)", min_value=0.0, max_value=100.0, value=80.0, step=1.0)
    target_time = st.number_input("Target Answer Time (seconds)", min_value=0.0, value=20.0, step=1.0)

    st.divider()
    st.header("Shrinkage Calculator")
    breaks = st.number_input("Breaks (minutes/day)", min_value=0.0, value=30.0, step=5.0)
    lunch = st.number_input("Lunch (minutes/day)", min_value=0.0, value=30.0, step=5.0)
    training = st.number_input("Training (minutes/day)", min_value=0.0, value=60.0, step=5.0)
    meetings = st.number_input("Meetings (minutes/day)", min_value=0.0, value=30.0, step=5.0)
    other = st.number_input("Other (minutes/day)", min_value=0.0, value=0.0, step=5.0)


try:
    inputs = staffing_input_from_form(
        {
            "calls_per_interval": calls,
            "average_handle_time": aht,
            "interval_minutes": interval_minutes,
            "target_service_level": target_sl,
            "target_answer_time": target_time,
        }
    )
    factors = ShrinkageFactors(breaks=breaks, lunch=lunch, training=training, meetings=meetings, other=other)
    plan = plan_staffing(
        inputs,
        factors,
        shift_minutes=settings.shift_minutes,
        max_agents=settings.max_agents,
    )
    scenarios = scenario_table(inputs, span=settings.scenario_span, max_agents=settings.max_agents)
except DomainError as e:
    st.error(f"Invalid inputs: {e}")
    st.stop()

result = plan.result

if not result.target_met:
    st.warning(
        f"Target service level is not reachable within {settings.max_agents} agents; "
        "showing the best-effort result at the ceiling."
    )

# -----------------------------
# Results
# -----------------------------
c1, c2, c3 = st.columns(3)
c1.metric("Required Agents", f"{result.required_agents}")
c2.metric("Service Level", f"{result.service_level:.1f}%")
c3.metric("Avg Speed of Answer", f"{result.average_speed_of_answer:.2f}")

c4, c5, c6 = st.columns(3)
c4.metric("Occupancy", f"{result.occupancy:.1f}%")
c5.metric("Probability of Wait", f"{result.probability_of_waiting:.1f}%")
c6.metric("With Shrinkage", f"{plan.scheduled_agents}")

st.subheader("Key Metrics")
k1, k2, k3, k4 = st.columns(4)
k1.metric("Traffic Intensity (Erlangs)", f"{result.traffic_intensity:.2f}")
k2.metric("Average Wait Time", f"{result.average_wait_time:.2f}")
k3.metric("Shrinkage Impact", f"+{plan.shrinkage_impact} agents")
k4.metric("Total Shrinkage", f"{plan.shrinkage_percent:.1f}%")


# -----------------------------
# Scenarios
# -----------------------------
st.subheader("Staffing Scenarios")
show_all = st.checkbox("Show all scenarios", value=False)
show_rows = len(scenarios) if show_all else min(15, len(scenarios))
st.dataframe(
    scenarios.head(show_rows).rename(
        columns={
            "agents": "Agents",
            "service_level": "Service Level (%)",
            "asa": "ASA",
            "occupancy": "Occupancy (%)",
            "probability_of_waiting": "P(Wait) (%)",
            "meets_target": "Meets Target",
            "is_recommended": "Recommended",
        }
    ),
    use_container_width=True,
)

st.download_button(
    "Download scenarios (CSV)",
    data=scenarios.to_csv(index=False).encode("utf-8"),
    file_name="staffing_scenarios.csv",
    mime="text/csv",
)
