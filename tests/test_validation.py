from datetime import date

import pytest

from conftest import make_record
from utils.errors import DuplicateSubmissionError, ValidationError
from utils.validation import check_submission, normalize_date, parse_steps, validate_submission


def test_valid_submission_has_no_errors(make_submission, window):
    assert validate_submission(make_submission(), window) == {}


def test_all_failures_are_reported(make_submission, window):
    sub = make_submission(
        student_id="   ",
        name="",
        date=None,
        steps="",
        session="Evening",
        campus="Tulsa",
        screenshot=None,
    )
    errors = validate_submission(sub, window)
    assert set(errors) == {"student_id", "name", "date", "steps", "session", "campus", "screenshot"}
    assert errors["steps"] == "Minimum 1,000 steps required to submit"


@pytest.mark.parametrize("steps,ok", [(999, False), (1000, True), ("1000", True), ("abc", False), (None, False)])
def test_minimum_steps(make_submission, window, steps, ok):
    errors = validate_submission(make_submission(steps=steps), window)
    assert ("steps" not in errors) is ok


@pytest.mark.parametrize(
    "day,ok",
    [("2026-01-01", True), ("2026-12-31", True), ("2025-12-31", False), ("2027-01-01", False), (date(2026, 6, 1), True)],
)
def test_date_window_is_inclusive(make_submission, window, day, ok):
    errors = validate_submission(make_submission(date=day), window)
    assert ("date" not in errors) is ok


def test_unparsable_date(make_submission, window):
    errors = validate_submission(make_submission(date="March 1st"), window)
    assert "date" in errors


def test_check_submission_duplicate_is_distinct(make_submission, window):
    existing = make_record(days={"2026-03-01": 5000})
    with pytest.raises(DuplicateSubmissionError) as exc:
        check_submission(make_submission(), existing, window)
    assert "2026-03-01" in str(exc.value)


def test_check_submission_field_errors_win_over_duplicate(make_submission, window):
    existing = make_record(days={"2026-03-01": 5000})
    with pytest.raises(ValidationError):
        check_submission(make_submission(steps=10), existing, window)


def test_helpers():
    assert normalize_date(date(2026, 3, 1)) == "2026-03-01"
    assert normalize_date("") is None
    assert parse_steps("2500.0") == 2500
    assert parse_steps("nan") is None
