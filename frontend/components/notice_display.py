"""Notice display component.

Renders the outcome of the last submit attempt.
"""

from typing import Optional

import streamlit as st

from frontend.services.feedback_flow import Notice


def render_notice(notice: Optional[Notice]) -> None:
    """Display a notice with styling that matches its level.

    Args:
        notice: The notice to show, or None to render nothing.
    """
    if notice is None or not notice.message:
        return

    if notice.level == "success":
        st.success(notice.message)
    elif notice.level == "warning":
        st.warning(notice.message)
    else:
        st.error(notice.message)
