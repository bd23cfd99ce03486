from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional, TypeVar, Union

from ..core.enums import Branch, TeacherAttendanceStatus
from ..core.exceptions import MalformedRowError
from .model import AttendanceEvidence, LegacyEvidence, ReconciliationResult, TeacherDaySummary

logger = logging.getLogger(__name__)

R = TypeVar("R", AttendanceEvidence, LegacyEvidence)

ExplicitInput = Optional[Iterable[Union[AttendanceEvidence, Mapping[str, Any]]]]
LegacyInput = Optional[Iterable[Union[LegacyEvidence, Mapping[str, Any]]]]


@dataclass
class _Entry:
    teacher_name: str
    branch: Branch
    present: set[date] = field(default_factory=set)
    absent: set[date] = field(default_factory=set)
    has_explicit: bool = False

    def freeze(self) -> TeacherDaySummary:
        return TeacherDaySummary(
            teacher_name=self.teacher_name,
            branch=self.branch,
            present_dates=frozenset(self.present),
            absent_dates=frozenset(self.absent),
            has_explicit_record=self.has_explicit,
        )


class AttendanceReconciler:
    """Merge explicit teacher attendance with legacy audit-log presence.

    Explicit rows always win: they decide present/absent for their dates and
    mark the teacher as explicitly tracked. Legacy rows only add presence for
    names in the validity set and never touch absences.

    A date is never in both sets of one summary: when the same
    (teacher, branch, date) appears twice in the explicit rows, the last row
    wins and the date is removed from the other set.

    Ordering: ``days_count`` descending, then teacher name (case-insensitive),
    then branch.
    """

    def reconcile(
        self,
        explicit: ExplicitInput,
        legacy: LegacyInput,
        valid_teachers: Optional[Iterable[str]],
    ) -> ReconciliationResult:
        entries: dict[tuple[str, Branch], _Entry] = {}
        skipped = 0

        def entry_for(name: str, branch: Branch) -> _Entry:
            key = (name, branch)
            e = entries.get(key)
            if e is None:
                e = _Entry(teacher_name=name, branch=branch)
                entries[key] = e
            return e

        explicit_rows, bad = self._validate(explicit, AttendanceEvidence)
        skipped += bad
        for rec in explicit_rows:
            e = entry_for(rec.teacher_name, rec.branch)
            e.has_explicit = True
            if rec.status is TeacherAttendanceStatus.PRESENT:
                e.absent.discard(rec.date)
                e.present.add(rec.date)
            else:
                e.present.discard(rec.date)
                e.absent.add(rec.date)

        valid = frozenset(n.strip() for n in valid_teachers or () if n)
        legacy_rows, bad = self._validate(legacy, LegacyEvidence)
        skipped += bad
        for rec in legacy_rows:
            if rec.performed_by_name not in valid:
                continue
            e = entry_for(rec.performed_by_name, rec.branch)
            # An explicit absence for the day outranks the log.
            if rec.date in e.absent:
                continue
            e.present.add(rec.date)

        summaries = sorted(
            (e.freeze() for e in entries.values()),
            key=lambda s: (-s.days_count, s.teacher_name.casefold(), s.branch.value),
        )
        total_days = sum(s.days_count for s in summaries)
        average_days = total_days / len(summaries) if summaries else 0

        if skipped:
            logger.warning("Reconciliation skipped %d malformed row(s)", skipped)

        return ReconciliationResult(
            summaries=tuple(summaries),
            total_days=total_days,
            average_days=average_days,
            skipped_rows=skipped,
        )

    @staticmethod
    def _validate(
        rows: Optional[Iterable[Any]],
        record_type: type[R],
    ) -> tuple[list[R], int]:
        out: list[R] = []
        bad = 0
        for row in rows or ():
            if isinstance(row, record_type):
                out.append(row)
                continue
            try:
                out.append(record_type.from_row(row))
            except MalformedRowError as e:
                bad += 1
                logger.warning("Skipping malformed attendance row: %s (row=%r)", e, e.row)
            except AttributeError:
                bad += 1
                logger.warning("Skipping non-mapping attendance row: %r", row)
        return out, bad
