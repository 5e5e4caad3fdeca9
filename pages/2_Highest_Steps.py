# pages/2_Highest_Steps.py
import streamlit as st
from config import SESSIONS, TOP_N, configure_logging
from utils.db import get_store
from utils.scoring import top_students

st.set_page_config(page_title="Highest Steps", page_icon="🏆", layout="wide")

def leaderboard(records, session=None):
    lb = top_students(records, session=session)
    if lb.empty:
        st.info("No data yet. Be the first to submit!")
        return

    st.dataframe(
        lb.drop(columns=["student_id"]),
        use_container_width=True,
        hide_index=True,
    )

    name = f"top_{(session or 'overall').replace(' ', '_').lower()}.csv"
    csv = lb.to_csv(index=False).encode("utf-8")
    st.download_button("Download (CSV)", csv, name, "text/csv", key=f"dl_{name}")

def main():
    configure_logging()
    st.title(f"🏆 Top {TOP_N} Students")

    records = get_store().load()
    labels = ["Overall"] + SESSIONS
    tabs = st.tabs(labels)
    with tabs[0]:
        leaderboard(records)
    for tab, session in zip(tabs[1:], SESSIONS):
        with tab:
            leaderboard(records, session=session)

if __name__ == "__main__":
    main()
