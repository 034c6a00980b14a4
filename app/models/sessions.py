from dataclasses import dataclass, field, asdict
from datetime import datetime, date
import pytz
from typing import Optional

from app.config import (
    ALL_COORDINATORS,
    ALL_SCHOOLS,
    APP_TIMEZONE,
    SHEET_DATETIME_FORMAT,
)
from app.utils.dates import parse_iso_date


# -----------------------------
# Data model
# -----------------------------
@dataclass(frozen=True)
class SessionRecord:
    timestamp: str
    coordinator_name: str
    session_start: str           # YYYY-MM-DD HH:MM:SS
    session_end: str             # YYYY-MM-DD HH:MM:SS
    module: str
    school_name: str
    class_counts: str            # "6a: 20, 7b: 15"
    learning_outcomes: str
    challenges_faced: str

    @staticmethod
    def create(
        *,
        coordinator_name: str,
        session_start,
        session_end,
        module: str,
        school_name: str,
        class_counts: str,
        learning_outcomes: str = "",
        challenges_faced: str = "",
        now: Optional[datetime] = None,
    ) -> "SessionRecord":
        now = now or datetime.now(pytz.timezone(APP_TIMEZONE))
        return SessionRecord(
            timestamp=now.strftime(SHEET_DATETIME_FORMAT),
            coordinator_name=(coordinator_name or "").strip(),
            session_start=_sheet_datetime(session_start),
            session_end=_sheet_datetime(session_end),
            module=(module or "").strip(),
            school_name=(school_name or "").strip(),
            class_counts=(class_counts or "").strip(),
            learning_outcomes=learning_outcomes or "",
            challenges_faced=challenges_faced or "",
        )

    @staticmethod
    def from_form(payload: dict, now: Optional[datetime] = None) -> "SessionRecord":
        return SessionRecord.create(
            coordinator_name=payload.get("name", ""),
            session_start=payload.get("sessionStartTime", ""),
            session_end=payload.get("sessionEndTime", ""),
            module=payload.get("module", ""),
            school_name=payload.get("schoolName", ""),
            class_counts=payload.get("classCounts", ""),
            learning_outcomes=payload.get("learningOutcomes", ""),
            challenges_faced=payload.get("challengesFaced", ""),
            now=now,
        )

    def to_row(self) -> list[str]:
        # Same order as TRACKER_HEADERS
        return [
            self.timestamp,
            self.coordinator_name,
            self.session_start,
            self.session_end,
            self.module,
            self.school_name,
            self.class_counts,
            self.learning_outcomes,
            self.challenges_faced,
        ]


def _sheet_datetime(value) -> str:
    if isinstance(value, datetime):
        return value.strftime(SHEET_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    # HTML datetime-local style "2024-01-05T10:30"
    return str(value or "").strip().replace("T", " ")


@dataclass(frozen=True)
class FilterCriteria:
    coordinator_name: Optional[str] = None
    school_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def coordinator_selected(self) -> bool:
        return bool(self.coordinator_name) and self.coordinator_name != ALL_COORDINATORS

    @property
    def school_selected(self) -> bool:
        return bool(self.school_name) and self.school_name != ALL_SCHOOLS

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    @staticmethod
    def from_dict(raw: dict) -> "FilterCriteria":
        """Accepts the dashboard request shape: name, school, startDate, endDate."""
        def _as_date(v):
            if isinstance(v, date):
                return v
            return parse_iso_date(v)

        return FilterCriteria(
            coordinator_name=raw.get("name") or None,
            school_name=raw.get("school") or None,
            start_date=_as_date(raw.get("startDate")),
            end_date=_as_date(raw.get("endDate")),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.coordinator_name,
            "school": self.school_name,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


@dataclass(frozen=True)
class ClassSession:
    module: object
    date: str
    coordinator: object
    students: int


@dataclass
class ClassBreakdownEntry:
    class_name: str
    sessions: list[ClassSession] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "className": self.class_name,
            "sessions": [asdict(s) for s in self.sessions],
        }
