from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Branch, NoteType, TeacherAttendanceStatus
from ..core.exceptions import MalformedRowError


def _required_text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None or not str(value).strip():
        raise MalformedRowError(f"missing {key}", row)
    return str(value).strip()


def _branch(row: Mapping[str, Any]) -> Branch:
    try:
        return Branch(row.get("maktab"))
    except ValueError:
        raise MalformedRowError(f"unknown maktab {row.get('maktab')!r}", row)


def _as_enum(enum_cls, value, field_name: str, record: object):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise MalformedRowError(f"unknown {field_name} {value!r}", record)


def _day(row: Mapping[str, Any]) -> date:
    value = row.get("date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise MalformedRowError("missing date", row)
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise MalformedRowError(f"invalid date {value!r}", row)


def _normalise(record, name_field: str) -> None:
    """Bring a directly constructed evidence record to the shape ``from_row`` produces."""

    name = getattr(record, name_field)
    if not isinstance(name, str) or not name.strip():
        raise MalformedRowError(f"missing {name_field}", record)
    if not isinstance(record.date, date):
        raise MalformedRowError(f"invalid date {record.date!r}", record)
    object.__setattr__(record, name_field, name.strip())
    object.__setattr__(record, "branch", _as_enum(Branch, record.branch, "maktab", record))
    if isinstance(record.date, datetime):
        object.__setattr__(record, "date", record.date.date())


@dataclass(frozen=True)
class AttendanceEvidence:
    """Explicit attendance fact: one row per (teacher, branch, date)."""

    teacher_name: str
    branch: Branch
    date: date
    status: TeacherAttendanceStatus
    marked_by: Optional[str] = None
    marked_by_name: Optional[str] = None
    auto_marked: bool = False

    def __post_init__(self):
        _normalise(self, "teacher_name")
        object.__setattr__(self, "status", _as_enum(TeacherAttendanceStatus, self.status, "status", self))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceEvidence":
        """Validate a ``teacher_attendance`` row."""

        status = row.get("status")
        try:
            parsed_status = TeacherAttendanceStatus(status)
        except ValueError:
            raise MalformedRowError(f"unknown status {status!r}", row)

        return cls(
            teacher_name=_required_text(row, "teacher_name"),
            branch=_branch(row),
            date=_day(row),
            status=parsed_status,
            marked_by=row.get("marked_by"),
            marked_by_name=row.get("marked_by_name"),
            auto_marked=bool(row.get("auto_marked", False)),
        )


@dataclass(frozen=True)
class LegacyEvidence:
    """Presence inferred from a historical ``attendance_audit_logs`` entry."""

    performed_by_name: str
    branch: Branch
    date: date

    def __post_init__(self):
        _normalise(self, "performed_by_name")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LegacyEvidence":
        return cls(
            performed_by_name=_required_text(row, "performed_by_name"),
            branch=_branch(row),
            date=_day(row),
        )


@dataclass(frozen=True)
class TeacherDaySummary:
    """Read-model: one teacher's month in one branch."""

    teacher_name: str
    branch: Branch
    present_dates: frozenset[date]
    absent_dates: frozenset[date]
    has_explicit_record: bool

    @property
    def days_count(self) -> int:
        return len(self.present_dates)

    def to_dict(self) -> dict:
        return {
            "teacher_name": self.teacher_name,
            "maktab": self.branch.value,
            "dates": [d.isoformat() for d in sorted(self.present_dates)],
            "absent_dates": [d.isoformat() for d in sorted(self.absent_dates)],
            "has_explicit_record": self.has_explicit_record,
            "days_count": self.days_count,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    summaries: tuple[TeacherDaySummary, ...]
    total_days: int
    average_days: float
    skipped_rows: int = 0

    @property
    def boys(self) -> list[TeacherDaySummary]:
        return [s for s in self.summaries if s.branch is Branch.BOYS]

    @property
    def girls(self) -> list[TeacherDaySummary]:
        return [s for s in self.summaries if s.branch is Branch.GIRLS]

    def to_dict(self) -> dict:
        return {
            "teachers": [s.to_dict() for s in self.summaries],
            "boys_teachers": [s.to_dict() for s in self.boys],
            "girls_teachers": [s.to_dict() for s in self.girls],
            "total_days": self.total_days,
            "average_days": self.average_days,
            "skipped_rows": self.skipped_rows,
        }


@dataclass(frozen=True)
class TeacherNote:
    """Reason recorded alongside an absence (``teacher_attendance_notes``)."""

    teacher_name: str
    branch: Branch
    date: date
    note: str
    note_type: NoteType = NoteType.OTHER

    @property
    def type_label(self) -> str:
        return self.note_type.label


@dataclass(frozen=True)
class Teacher:
    full_name: str
    branch: Branch


@dataclass(frozen=True)
class SchoolHoliday:
    date: date
    reason: str

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "reason": self.reason}
