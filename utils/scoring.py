import math
from typing import Dict, Optional

import pandas as pd

from config import SESSIONS, TOP_N
from utils.models import StudentRecord

STUDENT_COLUMNS = ["rank", "student_id", "name", "campus", "session", "total_steps", "days"]
CAMPUS_COLUMNS = ["rank", "campus", "score", "raw_avg", "students", "total_steps"]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used here (5.5 -> 6, 12272.5 -> 12273)."""
    return int(math.floor(value + 0.5))


def _students_frame(records: Dict[str, StudentRecord]) -> pd.DataFrame:
    rows = [
        {
            "student_id": sid,
            "name": r.name,
            "campus": r.campus,
            "session": r.session,
            "total_steps": r.total_steps,
            "days": len(r.submitted_dates),
        }
        for sid, r in records.items()
    ]
    return pd.DataFrame(rows, columns=STUDENT_COLUMNS[1:])


def top_students(
    records: Dict[str, StudentRecord],
    session: Optional[str] = None,
    limit: int = TOP_N,
) -> pd.DataFrame:
    """Top students by total steps, optionally limited to one session.

    Ties keep the order the records were stored in. An empty frame means no data.
    """
    if session is not None and session not in SESSIONS:
        raise ValueError(f"Unknown session: {session!r}")

    df = _students_frame(records)
    if session is not None:
        df = df[df["session"] == session]
    if df.empty:
        return pd.DataFrame(columns=STUDENT_COLUMNS)

    # mergesort is stable, so equal totals keep insertion order
    df = df.sort_values("total_steps", ascending=False, kind="mergesort").head(limit).reset_index(drop=True)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df[STUDENT_COLUMNS]


def session_leaderboards(records: Dict[str, StudentRecord], limit: int = TOP_N) -> Dict[str, pd.DataFrame]:
    return {s: top_students(records, session=s, limit=limit) for s in SESSIONS}


def smoothing_constant(campus_counts) -> int:
    """C = max(1, round(mean students per campus)), over campuses that have students."""
    counts = [c for c in campus_counts if c > 0]
    avg_size = sum(counts) / len(counts) if counts else 1
    return max(1, round_half_up(avg_size))


def bayesian_score(campus_total: float, campus_count: int, global_mean: float, c: int) -> int:
    """Shrink a campus average toward the global mean; small campuses move further."""
    return round_half_up((c * global_mean + campus_total) / (c + campus_count))


def campus_leaderboard(records: Dict[str, StudentRecord]) -> pd.DataFrame:
    """Campuses ranked by Bayesian-smoothed average steps per student.

    score = (C * global_mean + campus_total) / (C + campus_count), with C the rounded
    average campus size. A two-student campus with one outlier can't top the board on
    luck alone. Sums stay exact until the final rounding.
    """
    if not records:
        return pd.DataFrame(columns=CAMPUS_COLUMNS)

    totals: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for r in records.values():
        totals[r.campus] = totals.get(r.campus, 0) + r.total_steps
        counts[r.campus] = counts.get(r.campus, 0) + 1

    global_mean = sum(totals.values()) / len(records)
    c = smoothing_constant(counts.values())

    rows = [
        {
            "campus": campus,
            "score": bayesian_score(totals[campus], counts[campus], global_mean, c),
            "raw_avg": round_half_up(totals[campus] / counts[campus]),
            "students": counts[campus],
            "total_steps": totals[campus],
        }
        for campus in totals
    ]
    lb = pd.DataFrame(rows).sort_values("score", ascending=False, kind="mergesort").reset_index(drop=True)
    lb.insert(0, "rank", range(1, len(lb) + 1))
    return lb[CAMPUS_COLUMNS]


def challenge_summary(records: Dict[str, StudentRecord]) -> Dict[str, int]:
    """Headline numbers: student count, highest total, rounded average total."""
    totals = [r.total_steps for r in records.values()]
    if not totals:
        return {"students": 0, "highest_steps": 0, "average_steps": 0}
    return {
        "students": len(totals),
        "highest_steps": max(totals),
        "average_steps": round_half_up(sum(totals) / len(totals)),
    }
