"""
StitchMap - Stitch-by-stitch crochet pattern tracker

Streamlit application for working through a pattern one stitch at a time.

Usage:
    streamlit run app.py
"""

import streamlit as st
from pathlib import Path

from dotenv import load_dotenv

from stitchmap.schemas import SessionStatus
from stitchmap.tracker import (
    GroupStatus,
    SessionStore,
    WorkSessionService,
)
from stitchmap.utils import find_pattern, load_pattern, get_available_patterns


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).parent
load_dotenv(PROJECT_ROOT / ".env")

GROUP_INDICATORS = {
    GroupStatus.COMPLETED: "✓",
    GroupStatus.CURRENT: "→",
    GroupStatus.UPCOMING: "○",
}

st.set_page_config(
    page_title="StitchMap",
    page_icon="🧶",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

@st.cache_resource
def get_service() -> WorkSessionService:
    """Process-wide service shared by every browser session."""
    return WorkSessionService(SessionStore())


def init_session_state():
    """Initialize session state variables."""
    if "session_id" not in st.session_state:
        active = get_service().store.list_active()
        st.session_state.session_id = active[0].id if active else None


def current_session_and_pattern():
    """Load the selected work session and its pattern, or (None, None)."""
    session_id = st.session_state.session_id
    if session_id is None:
        return None, None
    session = get_service().get(session_id)
    return session, find_pattern(session.pattern_name)


# -----------------------------------------------------------------------------
# Sidebar: Sessions and Groups
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with session picker and group progress."""
    st.sidebar.title("🧶 StitchMap")
    service = get_service()

    available = get_available_patterns()
    if not available:
        st.sidebar.error("No patterns found in patterns/.")
        return

    st.sidebar.subheader("New Session")
    choice = st.sidebar.selectbox("Pattern", available, label_visibility="collapsed")
    if st.sidebar.button("Start", use_container_width=True):
        session = service.start(load_pattern(choice))
        st.session_state.session_id = session.id
        st.rerun()

    active = service.store.list_active()
    if active:
        st.sidebar.divider()
        st.sidebar.subheader("In Progress")
        for session in active:
            label = f"{session.pattern_name} (#{session.id}, {session.status.value})"
            if st.sidebar.button(label, key=f"session_{session.id}", use_container_width=True):
                st.session_state.session_id = session.id
                st.rerun()

    st.sidebar.caption(f"Completed sessions: {service.store.count_completed()}")


def render_group_list(report):
    """Render per-group progress in the sidebar."""
    st.sidebar.divider()
    st.sidebar.subheader("Groups")
    for group in report.groups:
        indicator = GROUP_INDICATORS[group.status]
        line = f"{indicator} **{group.label}** ({group.completed_in_group}/{group.total_in_group})"
        if group.status == GroupStatus.CURRENT and group.repeat_count > 1:
            line += f" · repeat {group.current_repeat}/{group.repeat_count}"
        st.sidebar.markdown(line)


# -----------------------------------------------------------------------------
# Main Content: Work Session
# -----------------------------------------------------------------------------

def render_session_view():
    """Render the active work session."""
    session, pattern = current_session_and_pattern()
    if session is None:
        st.info("Start a session from the sidebar to begin.")
        return

    service = get_service()
    report = service.progress(session, pattern)
    render_group_list(report)

    st.title(pattern.name)
    st.progress(report.percentage / 100)
    st.markdown(
        f"**{report.completed_units}/{report.total_units} stitches** ({report.percentage:.1f}%)"
    )

    if session.status == SessionStatus.COMPLETED:
        st.success("Pattern complete!")
    else:
        header = report.group_label
        if report.group_repeat_info:
            header += f" · {report.group_repeat_info}"
        st.subheader(header)

        col1, col2, col3 = st.columns([1, 2, 1])
        with col1:
            st.markdown(f"<center>{report.previous_abbreviation or '·'}</center>", unsafe_allow_html=True)
        with col2:
            st.markdown(
                f"<center><h1>{report.current_abbreviation}</h1>{report.current_name}</center>",
                unsafe_allow_html=True,
            )
        with col3:
            st.markdown(f"<center>{report.next_abbreviation or '·'}</center>", unsafe_allow_html=True)

    st.divider()
    render_controls(session, pattern)


def render_controls(session, pattern):
    """Render back/forward/pause/abandon buttons."""
    service = get_service()
    paused = session.status == SessionStatus.PAUSED

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        if st.button("← Back", use_container_width=True, disabled=paused):
            service.retreat(session, pattern)
            st.rerun()
    with col2:
        if st.button(
            "Stitch →",
            type="primary",
            use_container_width=True,
            disabled=session.status != SessionStatus.ACTIVE,
        ):
            service.advance(session, pattern)
            st.rerun()
    with col3:
        if paused:
            if st.button("Resume", use_container_width=True):
                service.resume(session)
                st.rerun()
        elif session.status == SessionStatus.ACTIVE:
            if st.button("Pause", use_container_width=True):
                service.pause(session)
                st.rerun()
    with col4:
        if st.button("Abandon", use_container_width=True):
            service.abandon(session.id)
            st.session_state.session_id = None
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    render_session_view()


if __name__ == "__main__":
    main()
