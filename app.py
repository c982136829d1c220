"""Group Population Predictor - Streamlit UI.

Configure population groups, then project them forward month by month.
"""

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from groupsim.config import MAX_GROUPS, load_settings
from groupsim.engine import SimulationEngine
from groupsim.errors import PredictionError
from groupsim.logging_config import setup_logging
from groupsim.model import months_between, project_series

settings = load_settings()
setup_logging(settings.log_level)

st.set_page_config(page_title="Group Population Predictor", layout="wide")
st.title("Group Population Predictor")

if "engine" not in st.session_state:
    st.session_state.engine = SimulationEngine()
if "reset_counter" not in st.session_state:
    st.session_state.reset_counter = 0

engine = st.session_state.engine
# Bumped when a profile is loaded so widgets pick up the new values
rc = st.session_state.reset_counter

# ── Sidebar: Profiles ──────────────────────────────────────────────────

st.sidebar.header("Profiles")

profile_labels = {p.id: f"{p.name} ({p.date_saved:%Y-%m-%d %H:%M})" for p in engine.saved_profiles}
if profile_labels:
    engine.selected_profile_id = st.sidebar.selectbox(
        "Saved profile", list(profile_labels), format_func=profile_labels.get, key=f"profile_{rc}"
    )
    col_load, col_delete = st.sidebar.columns(2)
    if col_load.button("Load", use_container_width=True):
        if engine.load_selected_profile() is not None:
            st.session_state.reset_counter += 1
            st.rerun()
    if col_delete.button("Delete", use_container_width=True):
        engine.delete_profile(engine.selected_profile_id)
        st.session_state.reset_counter += 1
        st.rerun()
else:
    st.sidebar.caption("No saved profiles yet.")

profile_name = st.sidebar.text_input("Profile name", value="My profile")
if st.sidebar.button("Save current settings", use_container_width=True):
    engine.save_profile(profile_name)
    st.sidebar.success(f"Saved '{profile_name}'.")

# ── Sidebar: Run parameters ────────────────────────────────────────────

st.sidebar.header("Simulation Period")

start_date = st.sidebar.date_input("Start month", value=engine.parameters.start_date, key=f"start_{rc}")
if start_date != engine.parameters.start_date:
    engine.set_start_date(start_date)

default_target = date(start_date.year + 10, start_date.month, 1)
target_date = st.sidebar.date_input("Predict population at", value=default_target,
                                    min_value=start_date, key=f"target_{rc}")

group_count = st.sidebar.number_input("Number of groups", min_value=1, max_value=MAX_GROUPS,
                                      value=len(engine.groups), step=1, key=f"count_{rc}")
if group_count != len(engine.groups):
    engine.set_group_count(int(group_count))

# ── Sidebar: Group parameters ──────────────────────────────────────────

st.sidebar.header("Groups")

# Widget ranges stretch to fit values loaded from a profile
for group in engine.groups:
    with st.sidebar.expander(group.name, expanded=False):
        k = f"{group.id}_{rc}"
        changes = {
            "name": st.text_input("Name", value=group.name, key=f"name_{k}"),
            "initial_population": st.number_input("Initial population", min_value=0,
                                                  value=group.initial_population, step=100,
                                                  key=f"pop_{k}"),
            "avg_life_expectancy": st.slider("Life expectancy (years)",
                                             min_value=min(1.0, group.avg_life_expectancy),
                                             max_value=max(120.0, group.avg_life_expectancy),
                                             value=group.avg_life_expectancy, step=0.5, key=f"le_{k}"),
            "female_ratio": st.slider("Female ratio", min_value=0.0, max_value=1.0,
                                      value=group.female_ratio, step=0.01, key=f"fr_{k}"),
            "male_ratio": st.slider("Male ratio", min_value=0.0, max_value=1.0,
                                    value=group.male_ratio, step=0.01, key=f"mr_{k}"),
            "percent_not_married": st.slider("Fraction never married", min_value=0.0, max_value=1.0,
                                             value=group.percent_not_married, step=0.01, key=f"nm_{k}"),
            "avg_children_per_woman": st.slider("Children per woman (TFR)", min_value=0.0,
                                                max_value=max(10.0, group.avg_children_per_woman),
                                                value=group.avg_children_per_woman, step=0.05,
                                                key=f"tfr_{k}"),
            "max_wives": st.number_input("Max wives per husband", min_value=1,
                                         max_value=max(10, group.max_wives),
                                         value=group.max_wives, step=1, key=f"mw_{k}"),
        }
        if any(getattr(group, name) != value for name, value in changes.items()):
            engine.update_group(group.id, **changes)

# ── Prediction ─────────────────────────────────────────────────────────

try:
    snapshot = engine.predict(target_date)
    result = project_series(engine.groups, engine.parameters.start_date,
                            months_between(engine.parameters.start_date, target_date))
except PredictionError as e:
    st.error(str(e))
    st.stop()

names = {g.id: g.name for g in engine.groups}
colors = {g.id: g.color for g in engine.groups}

st.markdown(f"**Start:** {snapshot.month - snapshot.months_elapsed} | "
            f"**Target:** {snapshot.month} | "
            f"**Months simulated:** {snapshot.months_elapsed}")

# ── Predicted populations ──────────────────────────────────────────────

st.subheader("Predicted Population")

cols = st.columns(min(len(engine.groups), 4))
for i, group in enumerate(engine.groups):
    start_pop = group.initial_population
    end_pop = snapshot.populations[group.id]
    pct_change = ((end_pop - start_pop) / start_pop * 100) if start_pop > 0 else 0
    cols[i % len(cols)].metric(group.name, f"{end_pop:,.0f}", delta=f"{pct_change:+.1f}%")

# ── Population over time ───────────────────────────────────────────────

st.subheader("Population Over Time")

x = [m.to_timestamp() for m in result.month_list]
fig_pop = go.Figure()
for gid in snapshot.populations:
    target = gid == engine.parameters.target_group_id
    fig_pop.add_trace(go.Scatter(
        x=x, y=result.group_series(gid),
        mode="lines", name=names[gid],
        line=dict(width=3 if target else 2, color=colors[gid]),
    ))
fig_pop.add_trace(go.Scatter(
    x=x, y=result.total_series,
    mode="lines", name="Total",
    line=dict(width=3, color="#2c3e50", dash="dash"),
))
fig_pop.update_layout(
    xaxis_title="Month",
    yaxis_title="Population",
    height=450,
    margin=dict(t=30, b=40),
)
st.plotly_chart(fig_pop, use_container_width=True)

# ── Summary Statistics ─────────────────────────────────────────────────

st.subheader("Summary")

start_total = result.total_series[0]
end_total = snapshot.total
change = end_total - start_total
pct_change = (change / start_total * 100) if start_total > 0 else 0

col_a, col_b, col_c, col_d = st.columns(4)
col_a.metric("Start Population", f"{start_total:,.0f}")
col_b.metric("End Population", f"{end_total:,.0f}")
col_c.metric("Change", f"{change:+,.0f}", delta=f"{pct_change:+.1f}%")
col_d.metric("Simulated Months", f"{snapshot.months_elapsed}")

# ── Export ─────────────────────────────────────────────────────────────

st.subheader("Export Results")

rows = []
for snap in result.snapshots:
    row = {"Month": str(snap.month), "Months Elapsed": snap.months_elapsed}
    for gid, pop in snap.populations.items():
        row[names[gid]] = round(pop, 2)
    row["Total"] = round(snap.total, 2)
    rows.append(row)

export_data = pd.DataFrame(rows)
csv_data = export_data.to_csv(index=False)

st.download_button(
    label="Download CSV",
    data=csv_data,
    file_name=f"prediction_{result.month_list[0]}_{snapshot.month}.csv",
    mime="text/csv",
)
