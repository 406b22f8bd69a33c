"""Study Timetable Generator - Main application file"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from backend.config import settings

# Import page modules
from modules.timetable_form import show_timetable_form_page

# ===================================================================
# PAGE CONFIGURATION
# ===================================================================

st.set_page_config(
    page_title="Study Timetable Generator",
    page_icon="📚",
    layout="wide"
)

# ===================================================================
# SIDEBAR
# ===================================================================

st.sidebar.title("📚 Study Timetable")
st.sidebar.markdown("NCERT-based study plans for Class 10-12, JEE and NEET")
st.sidebar.divider()
st.sidebar.caption(f"API: {settings.api_base_url}")

# ===================================================================
# PAGE
# ===================================================================

show_timetable_form_page()

# ===================================================================
# FOOTER
# ===================================================================

st.sidebar.divider()
st.sidebar.caption("Study Timetable Generator v1.0")
