"""
Reusable UI building blocks for the upload, review and export steps.
"""
from __future__ import annotations

from typing import Callable, Optional

import streamlit as st

from scribe_table.export import to_csv, to_spreadsheet
from scribe_table.grid import GridModel
from scribe_table.session import CellEdited
from ui.constants import (
    CSV_FILENAME,
    CSV_MIME,
    ICON_DESCRIPTION,
    ICON_REFRESH,
    ICON_TABLE_CHART,
    SPREADSHEET_FILENAME,
    SPREADSHEET_MIME,
    STATUS_BADGE_STYLES,
)
from ui.state import dispatch, get_upload_id


# ===== Status Badges =========================================================

def render_status_badge(label: str, variant: str = "info", *, icon: Optional[str] = None) -> None:
    """Render a text badge with variant styling."""
    config = STATUS_BADGE_STYLES.get(variant, STATUS_BADGE_STYLES["info"])
    prefix = icon or config.icon
    style = f"color: {config.text_color}; background: {config.background};"
    st.markdown(
        f"<span class='status-badge status-badge--{variant}' style=\"{style}\">{prefix} {label}</span>",
        unsafe_allow_html=True,
    )


# ===== Error Panel ===========================================================

def render_error_panel(message: str, on_retry: Callable[[], None]) -> None:
    """Show a failed extraction with a button that resets the session."""
    with st.container(border=True):
        render_status_badge("Processing Failed", "danger")
        st.write(message)
        st.button("Try Again", key="error.retry", on_click=on_retry)


# ===== Table Editor ==========================================================

def _cell_key(row: int, col: int) -> str:
    return f"grid::{get_upload_id()}::{row}::{col}"


def _on_cell_change(row: int, col: int) -> None:
    dispatch(CellEdited(row, col, st.session_state[_cell_key(row, col)]))


def render_table_editor(grid: GridModel) -> None:
    """
    Render every cell as a text input. Row 0 is the header row.

    Rows are laid out individually, so rows of differing length render as-is.
    """
    width = max(grid.width, 1)
    for row_idx, row in enumerate(grid):
        cols = st.columns([1] + [4] * width)
        with cols[0]:
            st.caption("#" if row_idx == 0 else str(row_idx))
        for col_idx, value in enumerate(row):
            with cols[col_idx + 1]:
                st.text_input(
                    f"Row {row_idx} column {col_idx + 1}",
                    value=value,
                    key=_cell_key(row_idx, col_idx),
                    label_visibility="collapsed",
                    placeholder=f"Col {col_idx + 1}" if row_idx == 0 else "",
                    on_change=_on_cell_change,
                    args=(row_idx, col_idx),
                )
    if not grid.data_rows:
        st.caption("No data rows found")


# ===== Export Actions ========================================================

def render_export_row(grid: GridModel, on_reset: Callable[[], None]) -> None:
    """Render reset and download buttons for the current grid."""
    reset_col, csv_col, xlsx_col = st.columns([1, 2, 2])
    with reset_col:
        st.button(
            ICON_REFRESH,
            key="export.reset",
            help="Upload New Image",
            use_container_width=True,
            on_click=on_reset,
        )
    with csv_col:
        st.download_button(
            label=f"{ICON_DESCRIPTION} Download CSV",
            data=to_csv(grid),
            file_name=CSV_FILENAME,
            mime=CSV_MIME,
            key="export.csv",
            use_container_width=True,
        )
    with xlsx_col:
        st.download_button(
            label=f"{ICON_TABLE_CHART} Download Excel",
            data=to_spreadsheet(grid),
            file_name=SPREADSHEET_FILENAME,
            mime=SPREADSHEET_MIME,
            key="export.xlsx",
            type="primary",
            use_container_width=True,
        )
