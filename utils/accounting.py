"""
Append/retract accounting for student records.

The module-level functions are pure: they take a records mapping and return a new one,
keeping these in step for every record:
    total_steps == sum of day entry steps
    set(submitted_dates) == set(daily_screenshots)
    a record with no submitted dates is removed

StepLedger wires them to a record store: load a fresh snapshot, apply, write the whole
dataset back. Writes are last-write-wins; there is no revision check.
"""

import logging
from datetime import date
from typing import Dict, Optional, Tuple

from utils.db import RecordStore
from utils.errors import DuplicateSubmissionError, NotFoundError
from utils.models import DayEntry, StudentRecord, Submission
from utils.validation import check_submission, normalize_date, parse_steps

logger = logging.getLogger(__name__)

Records = Dict[str, StudentRecord]


def apply_submission(
    records: Records,
    student_id: str,
    name: str,
    campus: str,
    session: str,
    day: str,
    steps: int,
    img: Optional[str],
) -> Records:
    existing = records.get(student_id)
    entry = DayEntry(steps=steps, img=img)

    if existing is None:
        updated = StudentRecord(
            name=name,
            campus=campus,
            session=session,
            total_steps=steps,
            submitted_dates=[day],
            daily_screenshots={day: entry},
        )
    else:
        if day in existing.submitted_dates:
            raise DuplicateSubmissionError(day)
        # Latest submission wins for profile fields
        updated = existing.with_changes(
            name=name,
            campus=campus,
            session=session,
            total_steps=existing.total_steps + steps,
            submitted_dates=[*existing.submitted_dates, day],
            daily_screenshots={**existing.daily_screenshots, day: entry},
        )

    new_records = dict(records)
    new_records[student_id] = updated
    return new_records


def retract_day(records: Records, student_id: str, day: str) -> Tuple[Records, int]:
    """Remove one day entry. Returns (new records, steps removed)."""
    record = records.get(student_id)
    if record is None:
        raise NotFoundError(f"No record for student {student_id!r}")
    if day not in record.submitted_dates and day not in record.daily_screenshots:
        raise NotFoundError(f"Student {student_id!r} has no entry for {day}")

    entry = record.daily_screenshots.get(day)
    removed = entry.steps if entry else 0
    if removed > record.total_steps:
        logger.warning(
            "Total for %s (%d) is below the retracted day's steps (%d); clamping to 0",
            student_id, record.total_steps, removed,
        )
    remaining_dates = [d for d in record.submitted_dates if d != day]
    remaining_shots = {d: e for d, e in record.daily_screenshots.items() if d != day}

    new_records = dict(records)
    if not remaining_dates:
        del new_records[student_id]
    else:
        new_records[student_id] = record.with_changes(
            total_steps=max(0, record.total_steps - removed),
            submitted_dates=remaining_dates,
            daily_screenshots=remaining_shots,
        )
    return new_records, removed


def remove_student(records: Records, student_id: str) -> Records:
    if student_id not in records:
        raise NotFoundError(f"No record for student {student_id!r}")
    new_records = dict(records)
    del new_records[student_id]
    return new_records


class StepLedger:
    """Runs submissions and admin deletions against a record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    def snapshot(self) -> Records:
        return self.store.load()

    def profile_for(self, student_id: str) -> Optional[Dict[str, str]]:
        """Stored name/campus/session for a known student, used to prefill the form."""
        record = self.snapshot().get((student_id or "").strip())
        if record is None:
            return None
        return {"name": record.name, "campus": record.campus, "session": record.session}

    def submit(self, submission: Submission, window: Optional[Tuple[date, date]] = None) -> StudentRecord:
        """Validate and append a day. Raises ValidationError / DuplicateSubmissionError.

        The duplicate-day rule is checked against a snapshot loaded right before the write.
        """
        student_id = (submission.student_id or "").strip()
        records = self.snapshot()
        check_submission(submission, records.get(student_id), window)

        day = normalize_date(submission.date)
        records = apply_submission(
            records,
            student_id,
            name=submission.name.strip(),
            campus=submission.campus,
            session=submission.session,
            day=day,
            steps=parse_steps(submission.steps),
            img=submission.screenshot,
        )
        logger.info("Recorded %s steps for %s on %s", submission.steps, student_id, day)
        self.store.save(records)
        return records[student_id]

    def retract(self, student_id: str, day) -> Optional[int]:
        """Remove one day for a student. Returns the steps removed, or None if there was nothing to remove."""
        try:
            key = normalize_date(day)
        except ValueError:
            # Imported data may hold keys that are not zero-padded ISO dates
            key = str(day)
        try:
            records, removed = retract_day(self.snapshot(), student_id, key)
        except NotFoundError as exc:
            logger.info("Retract skipped: %s", exc)
            return None
        logger.info("Removed %s for %s (%d steps)", day, student_id, removed)
        self.store.save(records)
        return removed

    def delete_student(self, student_id: str) -> bool:
        try:
            records = remove_student(self.snapshot(), student_id)
        except NotFoundError as exc:
            logger.info("Delete skipped: %s", exc)
            return False
        logger.info("Deleted student %s", student_id)
        self.store.save(records)
        return True
