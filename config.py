import logging
import os
from datetime import date
from typing import Tuple

# --- IMPORTANT: EDIT THESE FOR YOUR CHALLENGE ---
# Submissions are accepted for dates inside this window (inclusive).
CHALLENGE_START_ISO = "2026-01-01"
CHALLENGE_END_ISO = "2026-12-31"

# Admin credentials. Prefer to set via environment/Secrets; these are fallbacks.
ADMIN_USER = os.getenv("ADMIN_USER", "Student Advisory")
ADMIN_CODE = os.getenv("ADMIN_CODE")

# Connection string for the record store. Streamlit secrets take precedence (see utils/db.py).
DB_URL = os.getenv("DB_URL")
SQLITE_FALLBACK = "sqlite:///steps.db"
DOCUMENT_KEY = "students"

CAMPUSES = [
    "Lemley Memorial", "Broken Arrow", "Owasso", "Peoria",
    "Riverside", "Sand Springs", "Health Sciences Center",
]
SESSIONS = ["AM", "PM", "All Day"]

MIN_STEPS = 1000   # Minimum steps for a submission to count
TOP_N = 10         # Rows shown on the student leaderboards

APP_TITLE = "Campus Step Challenge"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def challenge_window() -> Tuple[date, date]:
    """Return the (first, last) dates on which steps may be logged."""
    start = date.fromisoformat(CHALLENGE_START_ISO)
    end = date.fromisoformat(CHALLENGE_END_ISO)
    if end < start:
        raise ValueError("CHALLENGE_END_ISO is before CHALLENGE_START_ISO")
    return start, end


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
