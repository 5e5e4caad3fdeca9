# pages/1_Campus_Average.py
import streamlit as st
from config import configure_logging
from utils.db import get_store
from utils.scoring import campus_leaderboard

st.set_page_config(page_title="Campus Average", page_icon="🏫", layout="wide")

def main():
    configure_logging()
    st.title("🏫 Campus Average")
    st.caption(
        "Ranked by Bayesian average — protects small campuses from outliers "
        "while fairly rewarding consistent effort."
    )

    lb = campus_leaderboard(get_store().load())
    if lb.empty:
        st.info("No data yet. Be the first to submit!")
        return

    st.dataframe(
        lb.rename(columns={"raw_avg": "raw avg", "total_steps": "total steps"}),
        use_container_width=True,
        hide_index=True,
    )
    st.bar_chart(lb.set_index("campus")["score"])

    csv = lb.to_csv(index=False).encode("utf-8")
    st.download_button("Download Campus Leaderboard (CSV)", csv, "campus_leaderboard.csv", "text/csv")

if __name__ == "__main__":
    main()
