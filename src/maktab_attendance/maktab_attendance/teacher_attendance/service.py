from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_days, month_bounds
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HOLIDAY_REASON, DEFAULT_TARGET_WEEKDAYS
from ..core.enums import Branch, BranchFilter, NoteType, TeacherAttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .csv_export import generate_teacher_attendance_csv
from .model import AttendanceEvidence, ReconciliationResult, SchoolHoliday, TeacherNote
from .reconciler import AttendanceReconciler
from .repository import HolidayRepository, TeacherAttendanceRepository, TeacherDirectory, TeacherNoteRepository
from .targets import TargetProgress, count_target_days, progress_against_target

logger = logging.getLogger(__name__)


class TeacherAttendanceService:
    def __init__(
        self,
        attendance: TeacherAttendanceRepository,
        directory: TeacherDirectory,
        notes: TeacherNoteRepository,
        holidays: HolidayRepository | None = None,
        *,
        reconciler: AttendanceReconciler | None = None,
    ):
        self._attendance = attendance
        self._directory = directory
        self._notes = notes
        self._holidays = holidays
        self._reconciler = reconciler or AttendanceReconciler()

    # ----- monthly reporting -----

    def monthly_report(self, *, month: date, branch_filter: BranchFilter) -> ReconciliationResult:
        start, end = month_bounds(month)
        branch = branch_filter.branch

        explicit = self._attendance.list_explicit(start=start, end=end, branch=branch)
        legacy = self._attendance.list_legacy(start=start, end=end, branch=branch)
        valid_teachers = self._directory.list_valid_teacher_names()

        result = self._reconciler.reconcile(explicit, legacy, valid_teachers)
        logger.debug(
            "Teacher report %s/%s: %d teacher(s), %d day(s)",
            start.strftime("%Y-%m"),
            branch_filter.value,
            len(result.summaries),
            result.total_days,
        )
        return result

    def monthly_export(
        self,
        *,
        month: date,
        branch_filter: BranchFilter,
        generated_at: datetime | None = None,
    ) -> str:
        start, end = month_bounds(month)
        report = self.monthly_report(month=month, branch_filter=branch_filter)
        notes = self._notes.list_notes(start=start, end=end, branch=branch_filter.branch)
        return generate_teacher_attendance_csv(
            report.summaries,
            month,
            branch_filter,
            notes,
            generated_at=generated_at,
        )

    def target_progress(
        self,
        *,
        month: date,
        branch_filter: BranchFilter,
        today: date,
        target_weekdays: Iterable[str] = DEFAULT_TARGET_WEEKDAYS,
    ) -> list[TargetProgress]:
        start, end = month_bounds(month)
        holidays = self._holidays.list_holidays(start=start, end=end) if self._holidays else ()
        target = count_target_days(month, target_weekdays, today=today, holidays=holidays)

        report = self.monthly_report(month=month, branch_filter=branch_filter)
        return progress_against_target(report.summaries, target)

    # ----- daily recording -----

    def day_records(self, *, branch: Branch, day: date) -> Sequence[AttendanceEvidence]:
        return self._attendance.list_for_day(branch=branch, day=day)

    def status_for(self, *, branch: Branch, day: date, teacher_name: str) -> Optional[AttendanceEvidence]:
        for r in self._attendance.list_for_day(branch=branch, day=day):
            if r.teacher_name == teacher_name:
                return r
        return None

    def record_status(
        self,
        *,
        branch: Branch,
        day: date,
        teacher_name: str,
        status: TeacherAttendanceStatus,
        marked_by: str,
        marked_by_name: str,
    ) -> AttendanceEvidence:
        record = AttendanceEvidence(
            teacher_name=require_non_empty(teacher_name, "teacher_name"),
            branch=branch,
            date=day,
            status=status,
            marked_by=require_non_empty(marked_by, "marked_by"),
            marked_by_name=require_non_empty(marked_by_name, "marked_by_name"),
            # Manual entries are never auto-marked.
            auto_marked=False,
        )
        self._attendance.upsert(record)
        logger.info("Marked %s %s on %s (%s)", record.teacher_name, status.value, day, branch.value)
        return record

    def clear_status(self, *, branch: Branch, day: date, teacher_name: str) -> None:
        teacher_name = require_non_empty(teacher_name, "teacher_name")
        if not self._attendance.delete(branch=branch, day=day, teacher_name=teacher_name):
            raise NotFoundError(f"No attendance for {teacher_name} on {day.isoformat()}")
        logger.info("Cleared %s on %s (%s)", teacher_name, day, branch.value)

    def mark_all(
        self,
        *,
        branch: Branch,
        day: date,
        status: TeacherAttendanceStatus,
        marked_by: str,
        marked_by_name: str,
        teacher_names: Optional[Sequence[str]] = None,
    ) -> int:
        if teacher_names is None:
            teacher_names = [t.full_name for t in self._directory.list_teachers(branch=branch)]

        names = [n.strip() for n in teacher_names if n and n.strip()]
        if not names:
            raise ValidationError("No teachers to mark")

        marked_by = require_non_empty(marked_by, "marked_by")
        marked_by_name = require_non_empty(marked_by_name, "marked_by_name")
        records = [
            AttendanceEvidence(
                teacher_name=name,
                branch=branch,
                date=day,
                status=status,
                marked_by=marked_by,
                marked_by_name=marked_by_name,
                auto_marked=False,
            )
            for name in dict.fromkeys(names)
        ]
        count = self._attendance.upsert_many(records)
        logger.info("Marked %d teacher(s) %s on %s (%s)", count, status.value, day, branch.value)
        return count

    def record_absence(
        self,
        *,
        branch: Branch,
        teacher_name: str,
        start: date,
        end: date | None,
        absence_type: NoteType,
        note: str | None,
        marked_by: str,
        marked_by_name: str,
    ) -> int:
        """Mark every day of [start, end] absent and attach the reason."""

        teacher_name = require_non_empty(teacher_name, "teacher_name")
        end = end or start
        if end < start:
            raise ValidationError("End date cannot be before start date")

        if absence_type is NoteType.OTHER:
            note_text = require_non_empty(note, "note")
        else:
            note_text = absence_type.label

        marked_by = require_non_empty(marked_by, "marked_by")
        marked_by_name = require_non_empty(marked_by_name, "marked_by_name")

        days = list(iter_days(start, end))
        self._attendance.upsert_many(
            [
                AttendanceEvidence(
                    teacher_name=teacher_name,
                    branch=branch,
                    date=d,
                    status=TeacherAttendanceStatus.ABSENT,
                    marked_by=marked_by,
                    marked_by_name=marked_by_name,
                    auto_marked=False,
                )
                for d in days
            ]
        )
        self._notes.upsert_notes(
            [
                TeacherNote(teacher_name=teacher_name, branch=branch, date=d, note=note_text, note_type=absence_type)
                for d in days
            ]
        )
        logger.info("Recorded %s for %s: %d day(s) from %s", absence_type.value, teacher_name, len(days), start)
        return len(days)

    # ----- school holidays -----

    def list_holidays(self) -> Sequence[SchoolHoliday]:
        return self._holiday_repo().list_all()

    def add_holidays(self, *, start: date, end: date | None = None, reason: str | None = None) -> int:
        """Add every day of [start, end] as a holiday. Dates already listed are skipped."""

        end = end or start
        if end < start:
            raise ValidationError("End date cannot be before start date")
        reason = (reason or "").strip() or DEFAULT_HOLIDAY_REASON

        repo = self._holiday_repo()
        existing = {h.date for h in repo.list_all()}
        new = [SchoolHoliday(date=d, reason=reason) for d in iter_days(start, end) if d not in existing]
        if not new:
            return 0

        added = repo.add_holidays(new)
        logger.info("Added %d holiday(s) from %s to %s", added, start, end)
        return added

    def remove_holiday(self, day: date) -> None:
        if not self._holiday_repo().remove_holiday(day):
            raise NotFoundError(f"{day.isoformat()} is not a holiday")
        logger.info("Removed holiday %s", day)

    def _holiday_repo(self) -> HolidayRepository:
        if self._holidays is None:
            raise ValidationError("Holidays are not configured")
        return self._holidays
