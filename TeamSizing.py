import logging
from html import escape

import matplotlib.pyplot as plt
import streamlit as st

from team_sizing.chart import chart_figure, fig_to_png_bytes
from team_sizing.config import (
    CONFIDENCE_LEVELS,
    MAX_MEMBERS,
    SCALES,
    TICK_SECONDS,
    TIMER_DURATIONS,
    confidence_label,
)
from team_sizing.errors import TopicRequiredError
from team_sizing.export import (
    JSON_MIME,
    PDF_MIME,
    XLSX_MIME,
    export_filename,
    export_json,
    log_export,
    to_excel_bytes,
    to_pdf_bytes,
)
from team_sizing.logger_setup import setup_logger
from team_sizing.session import SizingSession
from team_sizing.stats import format_summary
from team_sizing.timer import format_time

setup_logger()
log = logging.getLogger("team_sizing.app")

# -------------------- STREAMLIT CONFIG & THEME --------------------
st.set_page_config(page_title="Team Workload Sizing", layout="centered")

st.markdown("""
<style>
.block-container { padding-top: 1.0rem; max-width: 46rem; }
.member {
  background: #f3f4f6; border-radius: 8px;
  padding: 0.5rem 0.8rem; margin-bottom: 0.4rem;
  display: flex; justify-content: space-between; align-items: center;
}
.member .who { font-weight: 600; }
.member .meta { font-size: 0.85rem; color: #6b7280; }
.member .size { font-family: monospace; font-size: 1.2rem; }
.timer { font-family: monospace; font-size: 1.4rem; font-weight: 700; color: #4f46e5; }
.stats-box {
  background: #eef2ff; border: 1px dashed #a5b4fc; border-radius: 12px;
  padding: 10px 14px; font-size: 0.95rem;
}
</style>
""", unsafe_allow_html=True)

SESSION_KEY = "sizing"
FLASH_KEY = "flash"

# -------------------- STATE --------------------
def get_session() -> SizingSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = SizingSession()
        log.info("New sizing session")
    return st.session_state[SESSION_KEY]

def push_widget_state(session: SizingSession) -> None:
    """Copy session values into widget keys before the widgets are drawn."""
    st.session_state["topic_input"] = session.topic
    st.session_state["scale_input"] = session.scale.name
    st.session_state["duration_input"] = session.timer.duration
    st.session_state["name_input"] = session.draft.name
    st.session_state["comment_input"] = session.draft.comment
    st.session_state["confidence_input"] = session.draft.confidence

# -------------------- HANDLERS --------------------
def on_topic(session: SizingSession):
    session.set_topic(st.session_state["topic_input"])

def on_scale(session: SizingSession):
    session.select_scale(st.session_state["scale_input"])

def on_duration(session: SizingSession):
    session.set_duration(int(st.session_state["duration_input"]))

def on_start_timer(session: SizingSession):
    try:
        session.start_timer()
    except TopicRequiredError as e:
        st.session_state[FLASH_KEY] = str(e)

def on_draft_name(session: SizingSession):
    session.draft.name = st.session_state["name_input"]

def on_draft_comment(session: SizingSession):
    session.draft.comment = st.session_state["comment_input"]

def on_draft_confidence(session: SizingSession):
    session.draft.confidence = int(st.session_state["confidence_input"])

def on_pick_size(session: SizingSession, label: str):
    session.draft.size = label

def on_submit(session: SizingSession):
    # Text fields only commit on blur, so read them here as well.
    session.draft.name = st.session_state["name_input"]
    session.draft.comment = st.session_state["comment_input"]
    session.draft.confidence = int(st.session_state["confidence_input"])
    session.submit_draft()

def on_reveal(session: SizingSession):
    session.toggle_reveal()

def on_chart(session: SizingSession):
    session.toggle_chart()

def on_reset(session: SizingSession):
    session.reset()

# -------------------- SECTIONS --------------------
def render_timer(session: SizingSession):
    # The fragment only re-runs on a schedule while the countdown is active.
    run_every = TICK_SECONDS if session.timer.active else None

    @st.fragment(run_every=run_every)
    def countdown():
        if session.timer.active:
            session.catch_up()
            if not session.timer.active:
                st.rerun()
        st.markdown(f'<span class="timer">⏱️ {format_time(session.timer.remaining)}</span>', unsafe_allow_html=True)

    countdown()

def render_controls(session: SizingSession):
    st.text_input(
        "Topic",
        key="topic_input",
        placeholder="What are we sizing? (e.g., 'User Authentication Feature')",
        on_change=on_topic, args=(session,),
        disabled=session.topic_locked,
        label_visibility="collapsed",
    )

    c1, c2, c3, c4 = st.columns([3, 3, 2, 2])
    with c1:
        st.selectbox(
            "Scale", list(SCALES), key="scale_input",
            format_func=lambda name: SCALES[name]["title"],
            on_change=on_scale, args=(session,),
            disabled=session.scale_locked,
        )
    with c2:
        st.selectbox(
            "Timer", list(TIMER_DURATIONS), key="duration_input",
            format_func=lambda secs: TIMER_DURATIONS[secs],
            on_change=on_duration, args=(session,),
            disabled=not session.timer.idle,
        )
    with c3:
        st.write("")
        st.button(
            "Start", key="start_timer",
            on_click=on_start_timer, args=(session,),
            disabled=not session.timer.idle or session.revealed,
        )
    with c4:
        st.write("")
        render_timer(session)

def render_input(session: SizingSession):
    full = session.is_full
    st.text_input(
        "Your name", key="name_input", placeholder="Your name",
        on_change=on_draft_name, args=(session,), disabled=full,
    )

    labels = session.scale.labels
    cols = st.columns(len(labels))
    for col, label in zip(cols, labels):
        with col:
            st.button(
                label, key=f"size_{label}",
                type="primary" if session.draft.size == label else "secondary",
                on_click=on_pick_size, args=(session, label),
                disabled=full,
            )

    st.slider(
        "Confidence", min_value=1, max_value=len(CONFIDENCE_LEVELS), step=1,
        key="confidence_input", on_change=on_draft_confidence, args=(session,),
    )
    st.caption(confidence_label(session.draft.confidence))

    c1, c2 = st.columns([5, 1])
    with c1:
        st.text_area(
            "Comment", key="comment_input", placeholder="Add a comment (optional)",
            on_change=on_draft_comment, args=(session,), height=68,
            label_visibility="collapsed",
        )
    with c2:
        st.button(
            "Add", key="submit",
            on_click=on_submit, args=(session,),
            disabled=full,
        )

def render_roster(session: SizingSession):
    for e in session.estimates:
        comment = f'<div class="meta">💬 {escape(e.comment)}</div>' if e.comment else ""
        size = escape(e.size) if session.revealed else "?"
        st.markdown(
            f"""
<div class="member">
  <div>
    <div class="who">{escape(e.name)}</div>
    <div class="meta">Confidence: {confidence_label(e.confidence)}</div>
    {comment}
  </div>
  <span class="size">{size}</span>
</div>
            """,
            unsafe_allow_html=True,
        )

def render_results(session: SizingSession, want_excel: bool, want_pdf: bool):
    data = session.chart_data()
    chart_png = None

    if session.show_chart:
        fig = chart_figure(data)
        st.pyplot(fig)
        if want_pdf:
            chart_png = fig_to_png_bytes(fig)
        plt.close(fig)

    stats = session.statistics()
    st.markdown(
        '<div class="stats-box">{}</div>'.format(format_summary(stats).replace("\n", "<br/>")),
        unsafe_allow_html=True,
    )

    st.markdown("#### 📦 Export")
    col_j, col_x, col_p = st.columns(3)
    with col_j:
        st.download_button(
            label="⬇️ JSON",
            data=export_json(session),
            file_name=export_filename(session.topic, ext="json"),
            mime=JSON_MIME,
            on_click=log_export, args=(session, "JSON"),
        )
    if want_excel:
        with col_x:
            st.download_button(
                label="⬇️ Excel",
                data=to_excel_bytes(session),
                file_name=export_filename(session.topic, ext="xlsx"),
                mime=XLSX_MIME,
                on_click=log_export, args=(session, "XLSX"),
            )
    if want_pdf:
        with col_p:
            st.download_button(
                label="⬇️ PDF",
                data=to_pdf_bytes(session, chart_png),
                file_name=export_filename(session.topic, ext="pdf"),
                mime=PDF_MIME,
                on_click=log_export, args=(session, "PDF"),
            )

# -------------------- SIDEBAR: PARAMETERS --------------------
with st.sidebar:
    st.markdown("### ⚙️ Configuration")
    st.markdown("**Exports**")
    want_excel = st.checkbox("Enable Excel export", value=True)
    want_pdf = st.checkbox("Enable PDF export", value=True)

# -------------------- PAGE --------------------
session = get_session()
push_widget_state(session)

st.title(f"👥 Team Workload Sizing ({session.member_count}/{MAX_MEMBERS} members)")

flash = st.session_state.pop(FLASH_KEY, None)
if flash:
    st.warning(flash)

render_controls(session)
render_input(session)
render_roster(session)

has_results = session.revealed and session.member_count > 0

a1, a2, a3 = st.columns([2, 2, 1])
with a1:
    st.button(
        "📈 Hide Sizes" if session.revealed else "📈 Reveal Sizes",
        key="reveal",
        on_click=on_reveal, args=(session,),
        disabled=session.member_count == 0,
    )
with a2:
    if has_results:
        st.button(
            "📊 Hide Chart" if session.show_chart else "📊 Show Chart",
            key="chart",
            on_click=on_chart, args=(session,),
        )
with a3:
    st.button("↺ Reset", key="reset", on_click=on_reset, args=(session,))

if has_results:
    render_results(session, want_excel, want_pdf)
