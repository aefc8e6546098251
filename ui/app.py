"""
ScribeTable - Streamlit App
Upload a handwritten table, review the extracted grid, export it.
"""
import sys
from pathlib import Path

# Add parent directory to path to find scribe_table and ui packages
parent_dir = Path(__file__).parent.parent.absolute()
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import streamlit as st

from scribe_table.pipeline import process_upload
from scribe_table.session import ProcessingStatus, Reset
from ui.components import (
    render_error_panel,
    render_export_row,
    render_status_badge,
    render_table_editor,
)
from ui.constants import APP_NAME, ICON_EDIT, ICON_LIGHTBULB, ICON_UPLOAD, UPLOAD_EXTENSIONS
from ui.state import dispatch, get_session_state, get_upload_id, next_upload_id, set_session_state

# Page configuration
st.set_page_config(
    page_title=APP_NAME,
    page_icon="📋",
    layout="wide",
)

# Add custom CSS for styling
st.markdown(
    """
<style>
    .stButton > button {
        white-space: nowrap;
        border-radius: 6px;
    }
    .status-badge {
        display: inline-flex;
        align-items: center;
        padding: 0.1rem 0.5rem;
        font-size: 0.85rem;
        border-radius: 12px;
        font-weight: 500;
        line-height: 1.4;
    }
</style>
""",
    unsafe_allow_html=True,
)

st.title(APP_NAME)
st.caption(
    "Convert handwritten documents into digital spreadsheets using Gemini. "
    "Upload, verify, and export in seconds."
)


def reset_session() -> None:
    dispatch(Reset())


def handle_upload(uploaded_file) -> None:
    """Run the pipeline for an uploaded file, showing progress as it streams."""
    next_upload_id()
    with st.status("Processing image…", expanded=True) as status_box:
        progress_placeholder = st.empty()

        def show_state(state) -> None:
            set_session_state(state)
            if state.status is ProcessingStatus.PROCESSING:
                progress_placeholder.text(state.progress)

        final_state = process_upload(
            data=uploaded_file.getvalue(),
            mime_type=uploaded_file.type,
            file_name=uploaded_file.name,
            state=get_session_state(),
            on_state=show_state,
        )
        status_box.update(
            label="Done" if final_state.status is ProcessingStatus.SUCCESS else "Failed",
            state="complete" if final_state.status is ProcessingStatus.SUCCESS else "error",
        )
    set_session_state(final_state)
    st.rerun()


state = get_session_state()

if state.status in (ProcessingStatus.IDLE, ProcessingStatus.ERROR):
    with st.container(border=True):
        st.subheader(f"{ICON_UPLOAD} Upload Raw Data Image")
        st.caption("PNG, JPG, or WEBP containing tabular data")
        uploaded = st.file_uploader(
            "Image",
            type=UPLOAD_EXTENSIONS,
            key=f"uploader::{get_upload_id()}",
            label_visibility="collapsed",
        )
        if state.status is ProcessingStatus.ERROR:
            render_error_panel(state.error, on_retry=reset_session)
        if uploaded is not None:
            handle_upload(uploaded)

elif state.status is ProcessingStatus.PROCESSING:
    # Only reachable if a previous run was interrupted mid-extraction
    render_status_badge(state.progress, "processing")
    st.button("Start Over", on_click=reset_session)

elif state.status is ProcessingStatus.SUCCESS:
    render_export_row(state.grid, on_reset=reset_session)
    render_status_badge("Review data below before exporting", "success", icon=ICON_EDIT)
    render_table_editor(state.grid)
    st.caption(f"{ICON_LIGHTBULB} Tip: Click on any cell to edit content manually to ensure 100% accuracy.")
