from typing import Dict, List, Optional, Tuple

import pandas as pd

from utils.models import DayEntry, StudentRecord
from utils.validation import normalize_date

AUDIT_COLUMNS = ["student_id", "name", "campus", "session", "total_steps", "days", "latest_date"]


def _matches(student_id: str, record: StudentRecord, needle: str) -> bool:
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in (record.name, student_id, record.campus))


def search_records(
    records: Dict[str, StudentRecord],
    query: str = "",
    date=None,
) -> List[Tuple[str, StudentRecord]]:
    """Filter records for the audit view.

    `query` is a case-insensitive substring of name, student ID or campus; `date` keeps
    only students who logged that exact day. Both filters apply together. Results are
    ordered by most recent submission, newest first; students with no dates go last.
    """
    needle = (query or "").strip().lower()
    day = normalize_date(date)

    hits = [
        (sid, rec)
        for sid, rec in records.items()
        if _matches(sid, rec, needle) and (day is None or day in rec.submitted_dates)
    ]
    # "" sorts below every ISO date, so records without dates land last
    return sorted(hits, key=lambda item: item[1].latest_date(), reverse=True)


def day_entries(record: StudentRecord) -> List[Tuple[str, Optional[DayEntry]]]:
    """A student's days, newest first, paired with their entry (None if the entry is missing)."""
    return [(d, record.daily_screenshots.get(d)) for d in sorted(record.submitted_dates, reverse=True)]


def audit_frame(rows: List[Tuple[str, StudentRecord]]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "student_id": sid,
                "name": rec.name,
                "campus": rec.campus,
                "session": rec.session,
                "total_steps": rec.total_steps,
                "days": len(rec.submitted_dates),
                "latest_date": rec.latest_date(),
            }
            for sid, rec in rows
        ],
        columns=AUDIT_COLUMNS,
    )
