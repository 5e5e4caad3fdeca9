# app.py
from datetime import date

import streamlit as st

from config import APP_TITLE, CAMPUSES, MIN_STEPS, SESSIONS, challenge_window, configure_logging
from utils.accounting import StepLedger
from utils.db import get_store
from utils.errors import DuplicateSubmissionError, ValidationError
from utils.images import to_data_url
from utils.models import Submission
from utils.scoring import challenge_summary

st.set_page_config(page_title=APP_TITLE, page_icon="👟", layout="wide")


def _default_date() -> date:
    start, end = challenge_window()
    return min(max(date.today(), start), end)


def _index_of(options, value):
    return options.index(value) if value in options else None


def summary_row(ledger: StepLedger):
    stats = challenge_summary(ledger.snapshot())
    c1, c2, c3 = st.columns(3)
    c1.metric("Students", stats["students"])
    c2.metric("Highest total", f"{stats['highest_steps']:,}")
    c3.metric("Average total", f"{stats['average_steps']:,}")


def submit_form(ledger: StepLedger):
    start, end = challenge_window()
    st.subheader("Log Today's Steps")

    student_id = st.text_input("Student ID").strip()
    # Known students get their last profile prefilled
    profile = ledger.profile_for(student_id) if student_id else None
    profile = profile or {}

    with st.form("submit_steps", clear_on_submit=True):
        name = st.text_input("Full Name", value=profile.get("name", ""))
        c1, c2 = st.columns(2)
        with c1:
            day = st.date_input("Date", value=_default_date(), min_value=start, max_value=end)
        with c2:
            steps = st.number_input(f"Step Count (minimum {MIN_STEPS:,})", min_value=0, step=100, value=0)
        session = st.radio("Session", SESSIONS, index=_index_of(SESSIONS, profile.get("session")), horizontal=True)
        campus = st.selectbox("Campus", CAMPUSES, index=_index_of(CAMPUSES, profile.get("campus")), placeholder="Select your campus")
        upload = st.file_uploader("Screenshot proof", type=["png", "jpg", "jpeg", "gif", "webp"])
        submitted = st.form_submit_button("Submit Steps", type="primary", use_container_width=True)

    if not submitted:
        return

    screenshot = to_data_url(upload.getvalue(), upload.name, upload.type) if upload else None
    submission = Submission(
        student_id=student_id,
        name=name,
        date=day,
        steps=steps,
        session=session,
        campus=campus,
        screenshot=screenshot,
    )
    try:
        record = ledger.submit(submission)
    except ValidationError as exc:
        for message in exc.errors.values():
            st.error(message)
        return
    except DuplicateSubmissionError as exc:
        st.error(str(exc))
        return

    st.success(f"Steps submitted! Your total is now {record.total_steps:,} steps across {len(record.submitted_dates)} day(s).")


def main():
    configure_logging()
    ledger = StepLedger(get_store())

    st.title(APP_TITLE)
    st.caption("Log your steps daily, build your total, and climb the leaderboard!")

    summary_row(ledger)
    st.divider()
    submit_form(ledger)

    st.divider()
    st.subheader("Rules")
    st.write(
        f"- One submission per day, with at least {MIN_STEPS:,} steps.\n"
        "- A screenshot of your step count is required as proof.\n"
        "- Use the left sidebar to see the campus and student leaderboards."
    )


if __name__ == "__main__":
    main()
