"""Session state management helpers.

Handles initialization of the per-session feedback form and the last notice.

Centralizing session_state keys here prevents typos and ensures consistent
state management across components.
"""

from typing import Iterable, Optional

import streamlit as st

from frontend.services.feedback_flow import Notice
from frontend.utils.rating_form import FeedbackForm

# Session state keys - centralized to prevent typos and ensure consistency
KEY_FORM = "feedback_form"
KEY_NOTICE = "notice"


def initialize_state(subjects: Iterable[str]) -> None:
    """Initialize all session state variables with default values.

    Call early in the app so components can read the keys safely:
    - feedback_form: one FeedbackForm per browser session, reused across submissions
    - notice: the Notice from the last submit attempt (None if nothing to show)

    Args:
        subjects: Lesson labels for a new form, in presentation order.
    """
    if KEY_FORM not in st.session_state:
        st.session_state[KEY_FORM] = FeedbackForm.from_subjects(subjects)

    if KEY_NOTICE not in st.session_state:
        st.session_state[KEY_NOTICE] = None


def get_form() -> FeedbackForm:
    return st.session_state[KEY_FORM]


def pop_notice() -> Optional[Notice]:
    """Return the pending notice and clear it, so it is shown only once."""
    notice = st.session_state.get(KEY_NOTICE)
    st.session_state[KEY_NOTICE] = None
    return notice
