"""Streamlit entrypoint for the UI.

Run:
  streamlit run frontend/app.py
"""

from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

# Add repo root to sys.path BEFORE importing frontend modules
_script_dir = Path(__file__).resolve().parent
_repo_root = _script_dir.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from frontend.components.notice_display import render_notice
from frontend.components.rating_grid import render_rating_grid
from frontend.components.recent_feedback import render_recent_feedback
from frontend.config.settings import FEEDBACK_SUBJECTS
from frontend.services.api_client import APIError, list_recent_feedback
from frontend.services.feedback_flow import send_feedback
from frontend.utils.state import KEY_NOTICE, get_form, initialize_state, pop_notice


def _render_recent_panel() -> None:
    if not st.sidebar.checkbox("Show recent feedback", value=False):
        return
    try:
        records = list_recent_feedback()
    except APIError as exc:
        st.sidebar.error(str(exc))
        return
    with st.sidebar:
        render_recent_feedback(records)


def main() -> None:
    st.set_page_config(page_title="Lesson Feedback", layout="wide")
    st.title("Lesson Feedback")

    initialize_state(FEEDBACK_SUBJECTS)
    form = get_form()

    render_notice(pop_notice())

    if render_rating_grid(form):
        with st.spinner("Sending…"):
            st.session_state[KEY_NOTICE] = send_feedback(form)
        # Rerun so a reset form is redrawn with empty widgets.
        st.rerun()

    _render_recent_panel()


if __name__ == "__main__":
    main()
