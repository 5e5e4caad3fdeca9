from datetime import date

import pytest

from utils.accounting import StepLedger
from utils.db import MemoryStore
from utils.images import to_data_url
from utils.models import DayEntry, StudentRecord, Submission


@pytest.fixture()
def window():
    return date(2026, 1, 1), date(2026, 12, 31)


@pytest.fixture()
def screenshot():
    return to_data_url(b"\x89PNG\r\n\x1a\nfake", "proof.png")


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def ledger(store):
    return StepLedger(store)


@pytest.fixture()
def make_submission(screenshot):
    def _make(**overrides):
        fields = {
            "student_id": "S1",
            "name": "Avery Lee",
            "date": "2026-03-01",
            "steps": 5000,
            "session": "AM",
            "campus": "Owasso",
            "screenshot": screenshot,
        }
        fields.update(overrides)
        return Submission(**fields)

    return _make


def make_record(campus="Owasso", session="AM", name="Student", days=None):
    days = days or {"2026-03-01": 5000}
    return StudentRecord(
        name=name,
        campus=campus,
        session=session,
        total_steps=sum(days.values()),
        submitted_dates=list(days),
        daily_screenshots={d: DayEntry(steps=s, img="data:image/png;base64,AA==") for d, s in days.items()},
    )


def assert_consistent(records):
    for record in records.values():
        assert record.total_steps == record.entry_sum()
        assert set(record.submitted_dates) == set(record.daily_screenshots)
        assert len(record.submitted_dates) == len(set(record.submitted_dates))
        assert record.submitted_dates
