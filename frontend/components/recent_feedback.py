"""Recent feedback panel.

Renders the records returned by `GET /api/feedback` (newest first) for quick
operational inspection. Not part of the submission flow.
"""

from typing import List, Optional

import streamlit as st

from frontend.utils.formatting import format_rating, format_timestamp_label, truncate


def render_recent_feedback(records: Optional[List[dict]]) -> None:
    """Display stored submissions in an expandable section.

    Args:
        records: Records as returned by the API, or None if not loaded.
    """
    if not records:
        st.caption("No feedback stored yet.")
        return

    with st.expander(f"Recent feedback ({len(records)})", expanded=False):
        for record in records:
            submitted = format_timestamp_label(record.get("timestamp") or record.get("created_at"))
            st.markdown(f"**{submitted}** · `{record.get('id', '')}`")

            for item in record.get("items") or []:
                line = f"- {item.get('subject', '')}: {format_rating(item.get('rating'))}"
                comments = truncate(item.get("comments"))
                if comments:
                    line += f" · _{comments}_"
                st.markdown(line)
