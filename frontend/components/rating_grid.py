"""Lesson rating grid component.

Renders one row per lesson: label, a 1-5 rating choice and an optional
comments box, plus the Send button.

The grid lives inside st.form so choices are collected in one go when the user
clicks Send, not on every click. Widget keys include the form's `cycle`, so
after a successful submission (which resets the form) fresh, empty widgets
are rendered.
"""

import streamlit as st

from frontend.utils.rating_form import RATING_CHOICES, FeedbackForm

_COLUMN_WIDTHS = [3, 4, 4]


def render_rating_grid(form: FeedbackForm) -> bool:
    """Render the grid for `form` and copy the user's choices into it on Send.

    Args:
        form: The session's feedback form (rows are read for initial values).

    Returns:
        True if the Send button was clicked in this run, False otherwise.
    """
    collected = []
    with st.form(key=f"feedback_grid_{form.cycle}", clear_on_submit=False):
        subject_head, rating_head, comments_head = st.columns(_COLUMN_WIDTHS)
        subject_head.markdown("**Lesson**")
        rating_head.markdown("**Rating** (1 = poor, 5 = excellent)")
        comments_head.markdown("**Comments**")

        for index, row in enumerate(form.rows):
            subject_col, rating_col, comments_col = st.columns(_COLUMN_WIDTHS)
            subject_col.markdown(row.subject)

            # Horizontal radio: exactly one choice is marked at a time.
            rating = rating_col.radio(
                label=f"Rating for {row.subject}",
                options=RATING_CHOICES,
                index=None if row.rating is None else RATING_CHOICES.index(row.rating),
                horizontal=True,
                label_visibility="collapsed",
                key=f"rating_{form.cycle}_{index}",
            )
            comments = comments_col.text_area(
                label=f"Comments for {row.subject}",
                value=row.comments,
                placeholder="Optional",
                label_visibility="collapsed",
                key=f"comments_{form.cycle}_{index}",
            )
            collected.append((rating, comments))

        submitted = st.form_submit_button(label="Send", type="primary")

    if submitted:
        for index, (rating, comments) in enumerate(collected):
            if rating is not None:
                form.select(index, rating)
            form.set_comments(index, comments)

    return submitted
