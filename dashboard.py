import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from report import status_grid, task_spans
from simulator import ConfigError, LoadError, Simulator
from workload import generate_workload, parse_tasks

st.set_page_config(page_title="Processor Execution Simulator", layout="wide")

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        color: #1f77b4;
        text-align: center;
        margin-bottom: 1.5rem;
    }
    .stButton > button {
        width: 100%;
        background-color: #1f77b4;
        color: white;
        border: none;
        padding: 0.5rem 1rem;
        border-radius: 0.5rem;
        font-weight: bold;
    }
    .stButton > button:hover {
        background-color: #0d5aa7;
    }
</style>
""", unsafe_allow_html=True)

st.markdown('<h1 class="main-header">Processor Execution Simulator</h1>', unsafe_allow_html=True)

STATUS_COLORS = {"completed": "#2ca02c", "running": "#1f77b4", "idle": "#d9d9d9"}

# Sidebar for configuration
with st.sidebar:
    st.header("🔧 Configuration")
    num_processors = st.slider("Number of Processors", 1, 16, 2)
    num_cycles = st.slider("Number of Cycles", 1, 200, 20)

    source = st.radio("Task Source", ["Generated workload", "Upload task file"])
    if source == "Generated workload":
        scenario = st.selectbox("Workload Type:", ["balanced", "bursty", "priority_mix"])
        num_tasks = st.slider("Number of Tasks", 1, 100, 10)
        seed = st.number_input("Random Seed", value=42, help="Seed for reproducible results")
        uploaded = None
    else:
        uploaded = st.file_uploader("Task file", type=["txt"])

    st.markdown("---")
    st.markdown("**Dispatch rule**")
    st.markdown("- Lower priority number runs first")
    st.markdown("- Ties go to the longer task")
    st.markdown("- Remaining ties keep arrival order")


def load_selected_tasks():
    if source == "Generated workload":
        return generate_workload(scenario, num_tasks=num_tasks, seed=int(seed))
    if uploaded is None:
        return None
    return parse_tasks(uploaded.getvalue().decode("utf-8"))


try:
    tasks = load_selected_tasks()
except LoadError as exc:
    st.error(f"Could not read task file: {exc}")
    st.stop()

if tasks is None:
    st.info("Upload a task file to start.")
    st.stop()

col1, col2 = st.columns([1, 1])

with col1:
    st.subheader("📋 Task List")
    st.dataframe(pd.DataFrame([{
        "Task": t.task_id,
        "Creation": t.creation_time,
        "Execution": t.execution_time,
        "Priority": t.priority,
    } for t in tasks]), use_container_width=True, hide_index=True)

with col2:
    st.subheader("🚀 Run Simulation")
    st.info(f"**Processors:** {num_processors}  \n**Cycles:** {num_cycles}  \n**Tasks:** {len(tasks)}")
    if st.button("Start Simulation", type="primary", key="run_btn"):
        st.session_state.run_simulation = True

if not st.session_state.get("run_simulation", False):
    st.stop()

try:
    sim = Simulator(num_processors=num_processors, num_cycles=num_cycles)
except ConfigError as exc:
    st.error(str(exc))
    st.stop()

sim.load_tasks(tasks)
reports = sim.run()
result = sim.evaluate()

st.success("✅ Simulation completed!")

# Summary metrics
metric_cols = st.columns(4)
metric_cols[0].metric("Completed Tasks", f"{result['num_completed']} / {result['num_tasks']}")
metric_cols[1].metric("Avg Turnaround", f"{result['avg_turnaround']:.2f}")
metric_cols[2].metric("Avg Waiting", f"{result['avg_waiting']:.2f}")
metric_cols[3].metric("Avg Utilization", f"{result['avg_utilization']:.2%}")

# Gantt chart of task runs per processor
st.subheader("📅 Task Execution Timeline (Gantt Chart)")
df_spans = task_spans(reports)

if not df_spans.empty:
    fig_gantt = go.Figure()
    for _, row in df_spans.iterrows():
        fig_gantt.add_trace(go.Bar(
            name=row["task"],
            x=[row["end"] - row["start"]],
            y=[row["processor"]],
            orientation="h",
            base=row["start"],
            text=row["task"],
            marker_color=STATUS_COLORS["completed" if row["completed"] else "running"],
            hovertemplate=f"Task: {row['task']}<br>" +
                          f"Processor: {row['processor']}<br>" +
                          f"Start: C{row['start']}<br>" +
                          f"Cycles: {row['end'] - row['start']}<extra></extra>"
        ))

    fig_gantt.update_layout(
        title="Task Execution Timeline",
        xaxis_title="Clock Cycle",
        yaxis_title="Processors",
        height=max(300, 60 * num_processors),
        showlegend=False,
        barmode="stack"
    )
    fig_gantt.update_yaxes(categoryorder="array", categoryarray=[p.processor_id for p in sim.processors][::-1])
    st.plotly_chart(fig_gantt, use_container_width=True)
else:
    st.warning("No task ran during the simulated cycles")

# Per-processor utilization
st.subheader("⚙️ Processor Utilization")
df_util = pd.DataFrame({
    "Processor": list(result["utilization"].keys()),
    "Utilization": list(result["utilization"].values()),
})
fig_util = px.bar(df_util, x="Processor", y="Utilization", range_y=[0, 1])
fig_util.update_layout(height=300, yaxis_tickformat=".0%")
st.plotly_chart(fig_util, use_container_width=True)

# Cycle-by-cycle status table
st.subheader("🔍 Cycle Log")
st.dataframe(status_grid(reports), use_container_width=True)

arrivals = [{"Cycle": r.cycle, "Task": a.task_id, "Execution": a.execution_time, "Priority": a.priority}
            for r in reports for a in r.arrivals]
if arrivals:
    with st.expander("Arrivals"):
        st.dataframe(pd.DataFrame(arrivals), use_container_width=True, hide_index=True)
