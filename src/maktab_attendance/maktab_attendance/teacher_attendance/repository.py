from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Branch
from .model import AttendanceEvidence, SchoolHoliday, Teacher, TeacherNote


class TeacherAttendanceRepository(Protocol):
    def list_explicit(
        self, *, start: date, end: date, branch: Optional[Branch] = None
    ) -> Sequence[Mapping[str, Any]]:
        """Raw ``teacher_attendance`` rows; validated by the reconciler."""

        raise NotImplementedError

    def list_legacy(
        self, *, start: date, end: date, branch: Optional[Branch] = None
    ) -> Sequence[Mapping[str, Any]]:
        """Raw audit-log rows (performed_by_name, maktab, date) for created attendance."""

        raise NotImplementedError

    def list_for_day(self, *, branch: Branch, day: date) -> Sequence[AttendanceEvidence]:
        raise NotImplementedError

    def upsert(self, record: AttendanceEvidence) -> None:
        raise NotImplementedError

    def upsert_many(self, records: Sequence[AttendanceEvidence]) -> int:
        raise NotImplementedError

    def delete(self, *, branch: Branch, day: date, teacher_name: str) -> bool:
        """Remove one teacher's row for the day; False when there was none."""

        raise NotImplementedError


class TeacherDirectory(Protocol):
    def list_valid_teacher_names(self) -> set[str]:
        """Full names of profiles that carry a maktab assignment."""

        raise NotImplementedError

    def list_teachers(self, *, branch: Branch) -> Sequence[Teacher]:
        raise NotImplementedError


class TeacherNoteRepository(Protocol):
    def list_notes(
        self, *, start: date, end: date, branch: Optional[Branch] = None
    ) -> Sequence[TeacherNote]:
        raise NotImplementedError

    def upsert_notes(self, notes: Sequence[TeacherNote]) -> int:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_holidays(self, *, start: date, end: date) -> Sequence[date]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolHoliday]:
        raise NotImplementedError

    def add_holidays(self, holidays: Sequence[SchoolHoliday]) -> int:
        """Insert holidays, leaving dates that already exist untouched."""

        raise NotImplementedError

    def remove_holiday(self, day: date) -> bool:
        raise NotImplementedError
