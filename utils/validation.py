import math
from datetime import date
from typing import Dict, Optional, Tuple

from config import CAMPUSES, MIN_STEPS, SESSIONS, challenge_window
from utils.errors import DuplicateSubmissionError, ValidationError
from utils.models import StudentRecord, Submission


def normalize_date(value) -> Optional[str]:
    """Return an ISO YYYY-MM-DD string for a date or date-like string, None if empty.

    Raises ValueError for strings that are not ISO dates.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value).strip()).isoformat()


def parse_steps(value) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def validate_submission(
    submission: Submission,
    window: Optional[Tuple[date, date]] = None,
) -> Dict[str, str]:
    """Return field -> message for every failed rule; an empty dict means the fields are valid.

    The duplicate-day rule is checked separately by `is_duplicate_day` so the caller can
    report it as its own error.
    """
    start, end = window or challenge_window()
    errors: Dict[str, str] = {}

    if not (submission.student_id or "").strip():
        errors["student_id"] = "Student ID is required"
    if not (submission.name or "").strip():
        errors["name"] = "Name is required"

    try:
        iso = normalize_date(submission.date)
    except ValueError:
        errors["date"] = "Date must be a valid YYYY-MM-DD date"
    else:
        if iso is None:
            errors["date"] = "Date is required"
        elif not (start.isoformat() <= iso <= end.isoformat()):
            errors["date"] = f"Date must be between {start.isoformat()} and {end.isoformat()}"

    steps = parse_steps(submission.steps)
    if steps is None or steps < MIN_STEPS:
        errors["steps"] = f"Minimum {MIN_STEPS:,} steps required to submit"

    if submission.session not in SESSIONS:
        errors["session"] = "Please select a session"
    if submission.campus not in CAMPUSES:
        errors["campus"] = "Please select a campus"
    if not submission.has_screenshot:
        errors["screenshot"] = "Screenshot proof is required"

    return errors


def is_duplicate_day(existing: Optional[StudentRecord], iso_date: str) -> bool:
    return existing is not None and iso_date in existing.submitted_dates


def check_submission(
    submission: Submission,
    existing: Optional[StudentRecord] = None,
    window: Optional[Tuple[date, date]] = None,
) -> None:
    """Raise ValidationError for field failures, then DuplicateSubmissionError for a taken day."""
    errors = validate_submission(submission, window)
    if errors:
        raise ValidationError(errors)
    iso = normalize_date(submission.date)
    if is_duplicate_day(existing, iso):
        raise DuplicateSubmissionError(iso)
