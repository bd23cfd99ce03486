"""Monthly teacher attendance export.

Sections, in order: report header, SUMMARY, PER-TEACHER STATISTICS,
TEACHER NOTES (only when there are notes) and DETAILED TEACHING LOG.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Iterable, Sequence

from ..core.enums import BranchFilter, NoteType
from .model import TeacherDaySummary, TeacherNote


def _short(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def _long(d: date) -> str:
    return d.strftime("%b %d, %Y")


def generate_teacher_attendance_csv(
    summaries: Sequence[TeacherDaySummary],
    month: date,
    branch_filter: BranchFilter,
    notes: Iterable[TeacherNote] = (),
    *,
    generated_at: datetime | None = None,
) -> str:
    generated_at = generated_at or datetime.now()
    notes = list(notes)

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")

    def blank() -> None:
        out.write("\n")

    def section(title: str) -> None:
        out.write(f"{title}\n")

    writer.writerow(["TEACHER ATTENDANCE REPORT"])
    writer.writerow([f"Generated: {generated_at.strftime('%b %d, %Y at %I:%M %p')}"])
    writer.writerow([f"Month: {month.strftime('%B %Y')}"])
    label = "All" if branch_filter is BranchFilter.ALL else branch_filter.value.capitalize()
    writer.writerow([f"Maktab Filter: {label}"])
    blank()

    total_days = sum(s.days_count for s in summaries)
    avg = f"{total_days / len(summaries):.1f}" if summaries else "0"

    section("SUMMARY")
    writer.writerow(["Total Teachers", len(summaries)])
    writer.writerow(["Total Teaching Days", total_days])
    writer.writerow(["Average Days per Teacher", avg])
    writer.writerow(["Total Notes/Leave/Sickness", len(notes)])
    blank()

    section("PER-TEACHER STATISTICS")
    writer.writerow(["Teacher Name", "Maktab", "Days Taught", "Leave Days", "Sick Days", "Dates"])
    for s in summaries:
        own = [n for n in notes if n.teacher_name == s.teacher_name and n.branch is s.branch]
        leave_days = sum(1 for n in own if n.note_type is NoteType.LEAVE)
        sick_days = sum(1 for n in own if n.note_type is NoteType.SICKNESS)
        dates = ", ".join(_short(d) for d in sorted(s.present_dates))
        writer.writerow([s.teacher_name, s.branch.value, s.days_count, leave_days, sick_days, dates])
    blank()

    if notes:
        section("TEACHER NOTES")
        writer.writerow(["Date", "Teacher", "Maktab", "Type", "Note"])
        for n in sorted(notes, key=lambda n: n.date):
            writer.writerow([_long(n.date), n.teacher_name, n.branch.value, n.type_label, n.note or n.type_label])
        blank()

    section("DETAILED TEACHING LOG")
    writer.writerow(["Date", "Teacher", "Maktab"])
    log = [(d, s.teacher_name, s.branch.value) for s in summaries for d in s.present_dates]
    for d, name, branch in sorted(log, key=lambda r: r[0]):
        writer.writerow([_long(d), name, branch])

    return out.getvalue()
