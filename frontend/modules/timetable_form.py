"""Timetable form page - collect preferences, generate and show the timetable"""

import streamlit as st
from datetime import time
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from backend.schemas import Layout, parse_wall_clock
from backend.timetable_parser import get_layout
from utils.form_state import (
    CLASS_LEVEL_OPTIONS, STREAM_OPTIONS, TARGET_EXAM_OPTIONS, PURPOSE_OPTIONS, SUBJECT_OPTIONS,
    FormState, update_form
)
from utils.helpers import generate_timetable_for_form
from utils.styling import rows_to_dataframe, style_timetable

LAYOUT_LABELS = {
    Layout.FULL_WEEK.value: "Full week (Days, Time Slot, Monday - Sunday)",
    Layout.WEEKDAY.value: "Weekdays (Time Slot, Sunday - Friday)",
}

# Form field -> widget key
WIDGET_KEYS = {
    "class_level": "tt_class_level",
    "stream": "tt_stream",
    "target_exam": "tt_target_exam",
    "start_time": "tt_start_time",
    "end_time": "tt_end_time",
    "number_of_days": "tt_number_of_days",
    "purpose": "tt_purpose",
    "subjects": "tt_subjects",
    "chapters": "tt_chapters",
    "layout": "tt_layout",
}


def init_session_state():
    if "form_state" not in st.session_state:
        st.session_state.form_state = FormState()
    if "generating" not in st.session_state:
        st.session_state.generating = False
    if "pending_form" not in st.session_state:
        st.session_state.pending_form = None
    if "timetable_result" not in st.session_state:
        st.session_state.timetable_result = None
    if "timetable_message" not in st.session_state:
        st.session_state.timetable_message = None
    if "timetable_error" not in st.session_state:
        st.session_state.timetable_error = None


def _widget_value(field):
    value = st.session_state.get(WIDGET_KEYS[field])
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if field == "chapters":
        return [line.strip() for line in (value or "").splitlines() if line.strip()]
    if value is None:
        return ""
    return value


def _on_submit():
    """Fold widget values into the form state and queue one generation"""
    state = st.session_state.form_state
    for field in WIDGET_KEYS:
        state = update_form(state, field, _widget_value(field))
    st.session_state.form_state = state
    st.session_state.pending_form = state
    st.session_state.generating = True
    st.session_state.timetable_result = None
    st.session_state.timetable_error = None
    st.session_state.timetable_message = None


def _radio(label, options, field, state):
    current = getattr(state, field)
    return st.radio(
        label,
        options=options,
        index=options.index(current) if current in options else None,
        key=WIDGET_KEYS[field],
        horizontal=True
    )


def show_timetable_form_page():
    """Display the timetable form and, once generated, the timetable"""
    init_session_state()
    state = st.session_state.form_state

    st.title("📅 Create Your Study Timetable")

    with st.form("timetable_form"):
        col1, col2 = st.columns(2)
        with col1:
            _radio("Class Level", CLASS_LEVEL_OPTIONS, "class_level", state)
            _radio("Target Exam", TARGET_EXAM_OPTIONS, "target_exam", state)
            st.number_input(
                "Number of Days",
                min_value=1,
                max_value=365,
                value=state.number_of_days,
                key=WIDGET_KEYS["number_of_days"]
            )
        with col2:
            _radio("Stream", STREAM_OPTIONS, "stream", state)
            st.caption("Stream is not needed for Class 10")
            start_col, end_col = st.columns(2)
            with start_col:
                st.time_input("Start Time", value=parse_wall_clock(state.start_time),
                              key=WIDGET_KEYS["start_time"], step=900)
            with end_col:
                st.time_input("End Time", value=parse_wall_clock(state.end_time),
                              key=WIDGET_KEYS["end_time"], step=900)
            _radio("Purpose", PURPOSE_OPTIONS, "purpose", state)

        st.subheader("Optional")
        st.multiselect("Subjects", options=SUBJECT_OPTIONS, default=list(state.subjects),
                       key=WIDGET_KEYS["subjects"])
        st.text_area("Chapters (one per line)", value="\n".join(state.chapters),
                     key=WIDGET_KEYS["chapters"], placeholder="e.g., Laws of Motion")
        st.selectbox("Table Layout", options=list(LAYOUT_LABELS), format_func=LAYOUT_LABELS.get,
                     index=list(LAYOUT_LABELS).index(state.layout), key=WIDGET_KEYS["layout"])

        st.form_submit_button(
            "Generating Timetable..." if st.session_state.generating else "Generate Timetable",
            type="primary",
            use_container_width=True,
            disabled=st.session_state.generating,
            on_click=_on_submit
        )

    if st.session_state.pending_form is not None:
        _run_generation(st.session_state.pending_form)

    if st.session_state.timetable_error:
        st.error(st.session_state.timetable_error)

    if st.session_state.timetable_result is not None:
        if st.session_state.timetable_message:
            st.success(st.session_state.timetable_message)
        _show_timetable(st.session_state.timetable_result)


def _run_generation(form_state):
    with st.spinner("Generating timetable with AI... This may take a moment..."):
        try:
            success, message, result = generate_timetable_for_form(form_state)
        finally:
            st.session_state.pending_form = None
            st.session_state.generating = False

    if success:
        st.session_state.timetable_result = result
        st.session_state.timetable_message = message
    else:
        st.session_state.timetable_error = message
        st.session_state.timetable_result = None
    st.rerun()


def _show_timetable(result):
    layout = get_layout(result.layout)
    df = rows_to_dataframe(result.rows, layout)

    st.markdown("### Your Timetable")
    st.dataframe(style_timetable(df), use_container_width=True, hide_index=True)

    if result.mismatches:
        st.caption(
            f"⚠️ {len(result.mismatches)} row(s) did not have {len(layout)} columns; "
            "missing cells are left blank."
        )
