import streamlit as st
import plotly.express as px

from taskboard.allocator import AssignmentRejected
from taskboard.models import AUTO, MANUAL, BoardPrefs
from taskboard.scheduler import BoardSession, summarize
from taskboard.scoring import day_load_frame, schedule_frame
from taskboard.storage import JsonFileStore

from prometheus_client import start_http_server, Summary, Counter


# Metrics live in session state so reruns do not register them twice
if "BOARD_TIME" not in st.session_state:
    st.session_state.BOARD_TIME = Summary(
        "board_generation_seconds",
        "Time spent generating a monthly task board",
    )
BOARD_TIME = st.session_state.BOARD_TIME

if "ASSIGN_COUNTER" not in st.session_state:
    st.session_state.ASSIGN_COUNTER = Counter(
        "board_assignments_total",
        "Count of manual assignment attempts by outcome",
        ["outcome"],  # accepted / rejected
    )
ASSIGN_COUNTER = st.session_state.ASSIGN_COUNTER


if "metrics_started" not in st.session_state:
    start_http_server(8000)
    st.session_state.metrics_started = True


# Session State Setup
if "prefs" not in st.session_state:
    st.session_state.prefs = BoardPrefs()

if "session" not in st.session_state:
    st.session_state.session = BoardSession(
        JsonFileStore(st.session_state.prefs.store_path),
        st.session_state.prefs,
    )
session: BoardSession = st.session_state.session


# Sidebar: Inputs
st.sidebar.title("Monthly Task Planner")

st.sidebar.subheader("Board")
mode = st.sidebar.radio(
    "Mode", [MANUAL, AUTO],
    index=0 if st.session_state.prefs.mode == MANUAL else 1,
    format_func=lambda m: "Assign from pool" if m == MANUAL else "Auto-fill",
)
task_count = st.sidebar.number_input("Tasks per board", 1, 60,
                                     value=st.session_state.prefs.task_count)
use_seed = st.sidebar.checkbox("Fixed seed?", value=st.session_state.prefs.seed is not None)
seed = st.sidebar.number_input("Seed", 0, 2**31 - 1,
                               value=st.session_state.prefs.seed or 0) if use_seed else None

st.session_state.prefs.mode = mode
st.session_state.prefs.task_count = int(task_count)
st.session_state.prefs.seed = int(seed) if seed is not None else None

# Summary
summary = summarize(session.board)
st.sidebar.subheader("Progress")
st.sidebar.metric("Board score", summary["score"])
st.sidebar.metric("Progress score", session.progress_score())
st.sidebar.write(
    f'{summary["scheduled_hours"]:g}h of {summary["capacity_hours"]:g}h scheduled, '
    f'{summary["pending_tasks"]} task(s) pending'
)


# Main: Generate Board
st.title("Monthly Work Plan")

has_tasks = summary["placed_tasks"] or summary["pending_tasks"]
if st.button("Regenerate plan" if has_tasks else "Generate work plan"):
    with BOARD_TIME.time():
        session.regenerate()
    st.rerun()

board = session.board
done = session.completed_ids()

if not has_tasks:
    st.info(
        "No plan yet. Click **Generate work plan** to draw a month of tasks "
        "and spread them over 4 weeks of working hours."
    )


# Pending pool
if board.mode == MANUAL and board.pending:
    with st.expander(f"Pending tasks ({len(board.pending)})", expanded=False):
        st.dataframe([{
            "title": t.title,
            "hours": t.duration_hours,
            "priority": t.priority.label,
        } for t in board.pending])


# Calendar grid
def render_day(w_idx: int, d_idx: int):
    day = board.schedule[w_idx].days[d_idx]
    key = f"w{w_idx}d{d_idx}"

    st.markdown(f"**{day.day_name}**")
    st.progress(int(day.percent_used))
    if day.is_overloaded:
        st.error(f"{day.used_hours:g}/{day.capacity_hours:g}h, overloaded")
    else:
        st.caption(f"{day.used_hours:g}/{day.capacity_hours:g}h")

    if not day.tasks:
        st.caption("Free day")
    for task in day.tasks:
        mark = "✅ " if task.id in done else ""
        st.write(f"{mark}{task.title} ({task.duration_hours:g}h, {task.priority.label})")
        c1, c2 = st.columns(2)
        with c1:
            if task.id not in done and st.button("Done", key=f"done-{key}-{task.id}"):
                session.complete_task(w_idx, d_idx, task.id)
                st.rerun()
        with c2:
            if board.mode == MANUAL and st.button("Remove", key=f"rm-{key}-{task.id}"):
                session.unassign(w_idx, d_idx, task.id)
                st.rerun()

    if board.mode != MANUAL:
        return
    eligible = session.eligible(w_idx, d_idx)
    if not eligible:
        return
    choice = st.selectbox(
        "Add task", options=[t.id for t in eligible], key=f"pick-{key}",
        format_func=lambda tid: next(
            f"{t.title} ({t.duration_hours:g}h, {t.priority.label})"
            for t in eligible if t.id == tid),
    )
    if st.button("Assign", key=f"assign-{key}"):
        try:
            session.assign(w_idx, d_idx, choice)
            ASSIGN_COUNTER.labels(outcome="accepted").inc()
        except AssignmentRejected as exc:
            ASSIGN_COUNTER.labels(outcome="rejected").inc()
            st.warning(str(exc))
        else:
            st.rerun()


if has_tasks:
    tabs = st.tabs([f"Week {w.week_number}" for w in board.schedule])
    for w_idx, tab in enumerate(tabs):
        with tab:
            cols = st.columns(len(board.schedule[w_idx].days))
            for d_idx, col in enumerate(cols):
                with col:
                    render_day(w_idx, d_idx)

    # Load chart for transparency
    st.markdown("### Hours per day")
    loads = day_load_frame(board.schedule)
    loads["slot"] = "W" + loads["week"].astype(str) + " " + loads["day"].str[:3]
    fig = px.bar(loads, x="slot", y="used_hours", color="overloaded",
                 labels={"slot": "Day", "used_hours": "Scheduled hours"})
    fig.add_scatter(x=loads["slot"], y=loads["capacity_hours"], mode="lines",
                    name="capacity")
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("All scheduled tasks"):
        st.dataframe(schedule_frame(board.schedule))
