"""
Session state helpers wrapping the upload state machine.
"""
from __future__ import annotations

import streamlit as st

from scribe_table.session import Event, SessionState, transition

# Namespaced session state keys
SESSION_STATE_KEY = "scribe.session"
UPLOAD_ID_KEY = "scribe.upload_id"


def get_session_state() -> SessionState:
    """Return the current session state, starting idle."""
    if SESSION_STATE_KEY not in st.session_state:
        st.session_state[SESSION_STATE_KEY] = SessionState.idle()
    return st.session_state[SESSION_STATE_KEY]


def set_session_state(state: SessionState) -> None:
    st.session_state[SESSION_STATE_KEY] = state


def dispatch(event: Event) -> SessionState:
    """Apply an event to the stored state and persist the result."""
    state = transition(get_session_state(), event)
    set_session_state(state)
    return state


def get_upload_id() -> int:
    """Counter bumped per upload so widget keys never carry over between tables."""
    return st.session_state.get(UPLOAD_ID_KEY, 0)


def next_upload_id() -> int:
    st.session_state[UPLOAD_ID_KEY] = get_upload_id() + 1
    return st.session_state[UPLOAD_ID_KEY]
