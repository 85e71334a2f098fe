"""
NestEgg — Retirement Projection Dashboard
=========================================

Two views over the same inputs:
  1. Deterministic projection:  one balance path with the retirement marker
  2. Monte Carlo:               percentile bands, success probability, yearly table

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import DEFAULT_TRIAL_COUNT, SimulationConfig
from core.schema import RetirementInputs
from core.utils import clamp_number

from engine.projector import project
from engine.simulator import simulate

from profiles.form import RetirementForm
from profiles.loader import load_profile, save_profile
from profiles.validators import validate_inputs

from reports.aggregator import percentile_bands_frame, yearly_percentile_table
from reports.decisions import first_withdrawal_in_todays_dollars, generate_plan_report

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

BAND_COLORS = {
    "p5": "#b91c1c",
    "p10": "#ef4444",
    "p50": "#10b981",
    "p90": "#3b82f6",
    "p95": "#1d4ed8",
}
OUTLOOK_COLORS = {"on_track": "#10b981", "borderline": "#f59e0b", "at_risk": "#ef4444"}


# ---------------------------------------------------------------------------
# Cached engine calls
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner="Projecting balance...")
def _project(inputs: RetirementInputs):
    return project(inputs)


@st.cache_data(show_spinner="Running Monte Carlo trials...")
def _simulate(inputs: RetirementInputs, trial_count: int, seed):
    return simulate(inputs, trial_count, config=SimulationConfig(trial_count=trial_count, seed=seed))


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _fmt_money(val):
    return f"${val:,.0f}"


def _plot_projection(df: pd.DataFrame, *, height=360):
    if len(df) == 0:
        st.info("No data to plot.")
        return
    line = (
        alt.Chart(df).mark_line(color="#8884d8")
        .encode(
            x=alt.X("age:Q", title="Age"),
            y=alt.Y("balance:Q", title="Balance", axis=alt.Axis(format="$,.0f")),
            tooltip=["age", "balance", "is_retirement"],
        )
    )
    retire = df[df["is_retirement"]].head(1)
    rule = alt.Chart(retire).mark_rule(color="#ef4444", strokeDash=[4, 4]).encode(x="age:Q")
    st.altair_chart((line + rule).properties(height=height), use_container_width=True)


def _plot_bands(bands: pd.DataFrame, *, height=360):
    if len(bands) == 0:
        return
    area = (
        alt.Chart(bands).mark_area(opacity=0.15, color="steelblue")
        .encode(x=alt.X("age:Q", title="Age"), y=alt.Y("p5:Q"), y2="p95:Q")
    )
    long = bands.melt(id_vars=["age"], value_vars=list(BAND_COLORS), var_name="band", value_name="balance")
    lines = (
        alt.Chart(long).mark_line()
        .encode(
            x="age:Q",
            y=alt.Y("balance:Q", title="Balance", axis=alt.Axis(format="$,.0f")),
            color=alt.Color(
                "band:N",
                scale=alt.Scale(domain=list(BAND_COLORS), range=list(BAND_COLORS.values())),
                title="Percentile",
            ),
        )
    )
    st.altair_chart((area + lines).properties(height=height), use_container_width=True)


def _style_yearly(table: pd.DataFrame):
    def _row_style(row):
        color = "background-color: #fef3c7" if row.get("highlight", False) else ""
        return [color] * len(row)
    money_cols = [c for c in BAND_COLORS if c in table.columns]
    return table.style.apply(_row_style, axis=1).format({c: _fmt_money for c in money_cols})


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
st.set_page_config(page_title="NestEgg", layout="wide")
st.title("Retirement Calculator")
st.caption("Monthly balance projection with Monte Carlo percentile bands.")

if "profile" not in st.session_state:
    st.session_state["profile"] = RetirementForm.from_inputs(load_profile())

saved = st.session_state["profile"]

with st.sidebar:
    st.header("Assumptions")
    raw = {
        "current_age": st.number_input("Current Age", 18.0, 100.0, float(clamp_number(saved.current_age, 18, 100)), 1.0),
        "retirement_age": st.number_input("Retirement Age Target", 40.0, 100.0, float(clamp_number(saved.retirement_age, 40, 100)), 1.0),
        "lifespan": st.number_input("Lifespan Assumption (years)", 60.0, 120.0, float(clamp_number(saved.lifespan, 60, 120)), 1.0),
        "current_savings": st.number_input("Current Savings Balance", 0.0, None, float(max(0.0, saved.current_savings)), 1000.0),
        "annual_contributions": st.number_input("Annual Contributions", 0.0, None, float(max(0.0, saved.annual_contributions)), 1000.0),
        "annual_return": st.number_input("Annual Return Assumption (%)", 0.0, 20.0, clamp_number(saved.annual_return, 0.0, 20.0), 0.1),
        "annual_inflation": st.number_input("Annual Inflation Assumption (%)", 0.0, 10.0, clamp_number(saved.annual_inflation, 0.0, 10.0), 0.1),
        "retirement_spending": st.number_input(
            "Desired Annual Retirement Spending (today's dollars)", 0.0, None, float(max(0.0, saved.retirement_spending)), 1000.0
        ),
        "flexible_spending": st.checkbox("Flexible spending (cut 25% in down months)", saved.flexible_spending),
    }
    st.divider()
    trial_count = st.slider("Monte Carlo trials", 100, 5000, DEFAULT_TRIAL_COUNT, 100)
    fixed_seed = st.checkbox("Repeatable results (seed 7)", False)
    if st.button("Save profile", use_container_width=True):
        save_profile(RetirementForm(**raw).to_inputs())
        st.success("Profile saved.")

form = RetirementForm(**raw)
inputs = form.to_inputs()
st.session_state["profile"] = form

vr = validate_inputs(inputs)
if not vr.is_valid:
    for err in vr.errors:
        st.error(err)
    st.stop()
for warn in vr.warnings:
    st.warning(warn)

projection = _project(inputs)
result = _simulate(inputs, trial_count, 7 if fixed_seed else None)
report = generate_plan_report(inputs, projection, result)

# --- KPIs ---
k1, k2, k3, k4 = st.columns(4)
k1.metric("Success Probability", f"{report.success_rate:.1f}%")
k2.metric("Nest Egg at Retirement", _fmt_money(report.nest_egg))
k3.metric("Monthly Withdrawal (nominal)", _fmt_money(report.monthly_withdrawal))
k4.metric("Years of Retirement", f"{report.retirement_years:g}")
st.markdown(
    f"<div style='height:10px;border-radius:5px;background:#e5e7eb'>"
    f"<div style='width:{clamp_number(report.success_rate, 0, 100):.1f}%;height:10px;border-radius:5px;"
    f"background:{OUTLOOK_COLORS[report.success_band]}'></div></div>",
    unsafe_allow_html=True,
)
for flag in report.flags:
    st.warning(flag)

st.divider()
left, right = st.columns(2)
with left:
    st.markdown("**Monthly Accumulation Projection**")
    _plot_projection(projection.to_dataframe())
with right:
    st.markdown("**Monte Carlo Percentile Bands**")
    _plot_bands(percentile_bands_frame(result))

st.markdown("**Year-by-Year Percentiles**")
st.caption("Highlighted: the year after any band first reaches 25x annual spending (4% rule).")
yearly = yearly_percentile_table(result, retirement_spending=inputs.retirement_spending)
st.dataframe(_style_yearly(yearly), use_container_width=True, hide_index=True)

with st.expander("Plan report", expanded=False):
    st.dataframe(report.to_dataframe(), use_container_width=True, hide_index=True)
    st.caption(
        f"First retirement withdrawal: {_fmt_money(report.first_withdrawal_nominal)} nominal, "
        f"{_fmt_money(first_withdrawal_in_todays_dollars(inputs, projection))} in today's dollars."
    )
