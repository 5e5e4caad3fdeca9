from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date as date_cls
from typing import Any, Dict, List, Optional, Union

from utils.errors import StoreReadError


def _mapping(value: Any, what: str) -> Dict[str, Any]:
    """Return `value` as a dict (None becomes {}); anything else means the stored document is malformed."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise StoreReadError(f"{what} should be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DayEntry:
    """One calendar day's reported steps and the proof screenshot (opaque data URL)."""

    steps: int
    img: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayEntry":
        data = _mapping(data, "day entry")
        return cls(steps=int(data.get("steps") or 0), img=data.get("img"))

    def as_dict(self) -> Dict[str, Any]:
        return {"steps": self.steps, "img": self.img}


@dataclass(frozen=True)
class StudentRecord:
    """Per-student state as stored in the shared document.

    `total_steps` is a running total kept alongside the day entries; the
    accounting functions keep it equal to the sum of `daily_screenshots`.
    """

    name: str
    campus: str
    session: str
    total_steps: int = 0
    submitted_dates: List[str] = field(default_factory=list)
    daily_screenshots: Dict[str, DayEntry] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentRecord":
        data = _mapping(data, "student record")
        shots = _mapping(data.get("dailyScreenshots"), "dailyScreenshots")
        return cls(
            name=data.get("name", ""),
            campus=data.get("campus", ""),
            session=data.get("session", ""),
            total_steps=int(data.get("totalSteps") or 0),
            submitted_dates=list(data.get("submittedDates") or []),
            daily_screenshots={d: DayEntry.from_dict(e) for d, e in shots.items()},
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "campus": self.campus,
            "session": self.session,
            "totalSteps": self.total_steps,
            "submittedDates": list(self.submitted_dates),
            "dailyScreenshots": {d: e.as_dict() for d, e in self.daily_screenshots.items()},
        }

    def latest_date(self) -> str:
        # ISO dates are zero-padded, so string max == chronological max
        return max(self.submitted_dates) if self.submitted_dates else ""

    def entry_sum(self) -> int:
        return sum(e.steps for e in self.daily_screenshots.values())

    def with_changes(self, **changes: Any) -> "StudentRecord":
        return replace(self, **changes)


@dataclass
class Submission:
    """A candidate daily submission as typed into the form."""

    student_id: str
    name: str
    date: Union[str, date_cls, None]
    steps: Union[int, str, None]
    session: Optional[str]
    campus: Optional[str]
    screenshot: Optional[str] = None

    @property
    def has_screenshot(self) -> bool:
        return bool(self.screenshot)


def records_from_document(doc: Optional[Dict[str, Any]]) -> Dict[str, StudentRecord]:
    return {sid: StudentRecord.from_dict(data) for sid, data in _mapping(doc, "document").items()}


def records_to_document(records: Dict[str, StudentRecord]) -> Dict[str, Any]:
    return {sid: rec.as_dict() for sid, rec in records.items()}
